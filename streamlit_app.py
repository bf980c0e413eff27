from __future__ import annotations

import json
from dataclasses import replace

import streamlit as st

from mapgen import (
    PARAMETER_BOUNDS,
    GeneratedMaterial,
    GeneratedMesh,
    HeightCurveParameters,
    MapParameters,
    MaterialLayers,
    NoiseParameters,
    TerrainError,
    configure_logging,
    generate,
)
from ui.query import hex_to_rgba, params_to_query, rgba_to_hex
from ui.styles import inject_global_styles
from viz.export import (
    material_ramp_png_bytes,
    mesh_color_png_bytes,
    mesh_height_png_bytes,
)
from viz.figures import terrain_figure

st.set_page_config(
    page_title="Terrain Map",
    page_icon="~",
    layout="wide",
)

inject_global_styles()


@st.cache_resource
def _logging_ready() -> bool:
    configure_logging("INFO")
    return True


_logging_ready()


def _qp_get(name: str, default: str) -> str:
    try:
        raw = st.query_params.get(name)
    except Exception:
        raw = None

    if raw is None:
        return default
    if isinstance(raw, list):
        return str(raw[0]) if raw else default
    return str(raw)


def _qp_bool(name: str, default: bool) -> bool:
    raw = _qp_get(name, "1" if default else "0").strip().lower()
    return raw in {"1", "true", "t", "yes", "y", "on"}


def _qp_int(name: str, default: int) -> int:
    b = PARAMETER_BOUNDS[name]
    try:
        v = int(float(_qp_get(name, str(default))))
    except ValueError:
        v = default
    return int(b.clamp(v))


def _qp_float(name: str, default: float, bounds: str | None = None) -> float:
    b = PARAMETER_BOUNDS[bounds or name]
    try:
        v = float(_qp_get(name, str(default)))
    except ValueError:
        v = default
    return float(b.clamp(v))


def _qp_color(name: str, default: tuple[float, ...]) -> str:
    fallback = rgba_to_hex(default)
    raw = "#" + _qp_get(name, fallback).lstrip("#")
    try:
        hex_to_rgba(raw)
    except ValueError:
        return fallback
    return raw.lower()


def _slider(label: str, path: str, value: float, *, key: str) -> float:
    b = PARAMETER_BOUNDS[path]
    return st.slider(
        label,
        min_value=float(b.min_value),
        max_value=float(b.max_value),
        value=float(b.clamp(value)),
        step=float(b.step),
        key=key,
    )


def _int_slider(label: str, path: str, value: int, *, key: str) -> int:
    b = PARAMETER_BOUNDS[path]
    return st.slider(
        label,
        min_value=int(b.min_value),
        max_value=int(b.max_value),
        value=int(b.clamp(value)),
        step=int(b.step),
        key=key,
    )


@st.cache_data(show_spinner=False, max_entries=16)
def _generate(params_json: str) -> tuple[GeneratedMesh, GeneratedMaterial]:
    return generate(MapParameters.from_dict(json.loads(params_json)))


defaults = MapParameters.default()

with st.sidebar:
    st.header("Map")
    wireframe = st.toggle(
        "Wireframe", value=_qp_bool("wireframe", defaults.wireframe)
    )
    map_height = _slider(
        "Map height",
        "map_height",
        _qp_float("map_height", defaults.map_height),
        key="map_height",
    )
    level_of_detail = _int_slider(
        "Level of detail (0 = finest)",
        "level_of_detail",
        _qp_int("level_of_detail", defaults.level_of_detail),
        key="level_of_detail",
    )

    with st.expander("Noise", expanded=True):
        seed = st.number_input(
            "Seed",
            min_value=0,
            max_value=int(PARAMETER_BOUNDS["noise.seed"].max_value),
            value=_qp_int("noise.seed", defaults.noise.seed),
            step=1,
        )
        scale = _slider(
            "Scale (bigger = broader features)",
            "noise.scale",
            _qp_float("noise.scale", defaults.noise.scale),
            key="scale",
        )
        octaves = _int_slider(
            "Octaves",
            "noise.octaves",
            _qp_int("noise.octaves", defaults.noise.octaves),
            key="octaves",
        )
        persistence = _slider(
            "Persistence",
            "noise.persistence",
            _qp_float("noise.persistence", defaults.noise.persistence),
            key="persistence",
        )
        lacunarity = _slider(
            "Lacunarity",
            "noise.lacunarity",
            _qp_float("noise.lacunarity", defaults.noise.lacunarity),
            key="lacunarity",
        )

    with st.expander("Height curve", expanded=False):
        water_level = _slider(
            "Water level",
            "height_curve.water_level",
            _qp_float("height_curve.water_level", defaults.height_curve.water_level),
            key="water_level",
        )
        slope = _slider(
            "Slope",
            "height_curve.slope",
            _qp_float("height_curve.slope", defaults.height_curve.slope),
            key="slope",
        )

    with st.expander("Material layers", expanded=False):
        base = defaults.materials
        colors = []
        heights = []
        blends = []
        for i, color in enumerate(base.layer_colors):
            colors.append(
                hex_to_rgba(
                    st.color_picker(
                        f"Layer {i} color",
                        _qp_color(f"materials.layer_colors.{i}", color),
                        key=f"c{i}",
                    )
                )
            )
            if i == 0:
                continue
            c0, c1 = st.columns(2)
            with c0:
                heights.append(
                    _slider(
                        f"Start height {i}",
                        "materials.layer_heights",
                        _qp_float(
                            f"materials.layer_heights.{i - 1}",
                            base.layer_heights[i - 1],
                            "materials.layer_heights",
                        ),
                        key=f"h{i}",
                    )
                )
            with c1:
                blends.append(
                    _slider(
                        f"Blend {i}",
                        "materials.blend_values",
                        _qp_float(
                            f"materials.blend_values.{i - 1}",
                            base.blend_values[i - 1],
                            "materials.blend_values",
                        ),
                        key=f"b{i}",
                    )
                )

st.title("Terrain Map")

try:
    params = replace(
        defaults,
        wireframe=bool(wireframe),
        map_height=float(map_height),
        level_of_detail=int(level_of_detail),
        noise=NoiseParameters(
            seed=int(seed),
            scale=float(scale),
            octaves=int(octaves),
            persistence=float(persistence),
            lacunarity=float(lacunarity),
        ),
        height_curve=HeightCurveParameters(
            water_level=float(water_level), slope=float(slope)
        ),
        materials=MaterialLayers(
            layer_colors=tuple(colors),
            layer_heights=tuple(heights),
            blend_values=tuple(blends),
        ),
    )
    with st.spinner("Generating terrain..."):
        mesh, material = _generate(json.dumps(params.to_dict(), sort_keys=True))
except TerrainError as exc:
    st.error(str(exc))
    st.stop()

st.query_params.update(params_to_query(params))

m0, m1, m2 = st.columns(3)
m0.metric("Vertices", f"{mesh.vertex_count:,}")
m1.metric("Triangles", f"{mesh.triangle_count:,}")
m2.metric("Grid", f"{mesh.grid_shape[1]} x {mesh.grid_shape[0]}")

st.plotly_chart(terrain_figure(mesh, material), width="stretch", key="terrain3d")

st.subheader("Material ramp")
ramp = material_ramp_png_bytes(material, width=512, height=24)
st.image(ramp)

d0, d1, d2 = st.columns(3)
with d0:
    st.download_button(
        "Height preview (PNG)",
        data=mesh_height_png_bytes(mesh),
        file_name="terrain_height.png",
        mime="image/png",
    )
with d1:
    st.download_button(
        "Colour preview (PNG)",
        data=mesh_color_png_bytes(mesh, material),
        file_name="terrain_color.png",
        mime="image/png",
    )
with d2:
    st.download_button(
        "Parameters (JSON)",
        data=json.dumps(params.to_dict(), indent=2),
        file_name="terrain_params.json",
        mime="application/json",
    )
