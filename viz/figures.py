from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from mapgen.material import GeneratedMaterial
from mapgen.mesh import GeneratedMesh


def _rgba_strings(rgba01: np.ndarray) -> list[str]:
    c = np.clip(np.asarray(rgba01, dtype=np.float64), 0.0, 1.0)
    rgb = np.rint(c[:, :3] * 255.0).astype(int)
    return [
        f"rgba({r},{g},{b},{a:.3f})" for (r, g, b), a in zip(rgb.tolist(), c[:, 3])
    ]


def wireframe_trace(mesh: GeneratedMesh, *, color: str = "rgba(20,20,20,0.6)"):
    edges = mesh.edges()
    p = mesh.positions
    # NaN breaks the polyline between edges.
    xs = np.full((edges.shape[0], 3), np.nan)
    ys = np.full_like(xs, np.nan)
    zs = np.full_like(xs, np.nan)
    xs[:, 0], xs[:, 1] = p[edges[:, 0], 0], p[edges[:, 1], 0]
    ys[:, 0], ys[:, 1] = p[edges[:, 0], 1], p[edges[:, 1], 1]
    zs[:, 0], zs[:, 1] = p[edges[:, 0], 2], p[edges[:, 1], 2]
    return go.Scatter3d(
        x=xs.ravel(),
        # Plotly's z axis is up; the mesh uses y up.
        y=zs.ravel(),
        z=ys.ravel(),
        mode="lines",
        line=dict(color=color, width=1),
        hoverinfo="skip",
        showlegend=False,
    )


def terrain_figure(
    mesh: GeneratedMesh,
    material: GeneratedMaterial,
    *,
    height: int = 560,
) -> go.Figure:
    """3D figure of a generated terrain.

    Solid meshes are coloured with the blended vertex colours; when the
    material carries the wireframe hint only the triangle edges are drawn.
    """

    p = mesh.positions
    if material.vertex_colors.shape[0] != mesh.vertex_count:
        raise ValueError("material was not generated for this mesh")

    if material.wireframe:
        data = [wireframe_trace(mesh)]
    else:
        tri = mesh.indices
        data = [
            go.Mesh3d(
                x=p[:, 0],
                y=p[:, 2],
                z=p[:, 1],
                i=tri[:, 0],
                j=tri[:, 1],
                k=tri[:, 2],
                vertexcolor=_rgba_strings(material.vertex_colors),
                flatshading=False,
                lighting=dict(ambient=0.45, diffuse=0.8, specular=0.05),
                hoverinfo="skip",
            )
        ]

    fig = go.Figure(data=data)
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        height=int(height),
        scene=dict(
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            zaxis=dict(visible=False),
            aspectmode="data",
        ),
    )
    return fig
