from __future__ import annotations

from dataclasses import replace

import pytest

from mapgen.generate import generate
from mapgen.mesh import MeshBuilder
from mapgen.params import MapParameters
from viz.figures import terrain_figure


def test_solid_figure_uses_mesh3d() -> None:
    mesh, material = generate(MapParameters.default(), builder=MeshBuilder(size=17))
    fig = terrain_figure(mesh, material)
    assert len(fig.data) == 1
    trace = fig.data[0]
    assert trace.type == "mesh3d"
    assert len(trace.i) == mesh.triangle_count
    assert len(trace.vertexcolor) == mesh.vertex_count


def test_wireframe_figure_draws_edges() -> None:
    params = replace(MapParameters.default(), wireframe=True)
    mesh, material = generate(params, builder=MeshBuilder(size=9))
    fig = terrain_figure(mesh, material)
    trace = fig.data[0]
    assert trace.type == "scatter3d"
    assert len(trace.x) == 3 * mesh.edges().shape[0]


def test_mismatched_material_rejected() -> None:
    mesh, _ = generate(MapParameters.default(), builder=MeshBuilder(size=9))
    _, other = generate(MapParameters.default(), builder=MeshBuilder(size=17))
    with pytest.raises(ValueError):
        terrain_figure(mesh, other)
