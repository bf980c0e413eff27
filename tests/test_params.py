from __future__ import annotations

from dataclasses import replace

import pytest

from mapgen.errors import InvalidParameterError, TerrainError
from mapgen.params import (
    BLUE,
    DARK_GREEN,
    GRAY,
    GREEN,
    WHITE,
    HeightCurveParameters,
    MapParameters,
    MaterialLayers,
    NoiseParameters,
)


def test_defaults_match_documented_values() -> None:
    p = MapParameters.default()
    assert p.wireframe is False
    assert p.map_height == 10.0
    assert p.level_of_detail == 0

    assert p.noise == NoiseParameters(
        seed=0, scale=40.0, octaves=4, persistence=0.5, lacunarity=3.0
    )
    assert p.height_curve == HeightCurveParameters(water_level=0.25, slope=1.5)
    assert p.materials.layer_colors == (BLUE, GREEN, DARK_GREEN, GRAY, WHITE)
    assert p.materials.layer_heights == (0.2, 0.35, 0.5, 0.8)
    assert p.materials.blend_values == (0.05, 0.05, 0.1, 0.15)
    assert MapParameters.new() == p


def test_parameters_are_hashable_values() -> None:
    a = MapParameters.default()
    b = MapParameters.default()
    assert a == b
    assert hash(a) == hash(b)
    with pytest.raises(AttributeError):
        a.map_height = 3.0  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(scale=0.0),
        dict(scale=-4.0),
        dict(scale=float("nan")),
        dict(octaves=0),
        dict(octaves=7),
        dict(persistence=-0.1),
        dict(persistence=1.5),
        dict(lacunarity=0.5),
        dict(seed=-1),
        dict(seed=2**64),
        dict(seed=1.5),
    ],
)
def test_noise_parameters_reject_out_of_range(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError):
        NoiseParameters(**kwargs)


def test_noise_parameters_accept_large_seed() -> None:
    assert NoiseParameters(seed=2**64 - 1).seed == 2**64 - 1


@pytest.mark.parametrize(
    "kwargs", [dict(water_level=-0.1), dict(water_level=1.1), dict(slope=0.5)]
)
def test_height_curve_parameters_reject_out_of_range(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError):
        HeightCurveParameters(**kwargs)


def test_material_layers_reject_mismatched_threshold_count() -> None:
    with pytest.raises(InvalidParameterError):
        MaterialLayers(
            layer_colors=(BLUE, GREEN, WHITE),
            layer_heights=(0.2, 0.5, 0.8),
            blend_values=(0.05, 0.05, 0.05),
        )


def test_material_layers_reject_mismatched_blend_count() -> None:
    with pytest.raises(InvalidParameterError):
        MaterialLayers(
            layer_colors=(BLUE, GREEN, WHITE),
            layer_heights=(0.2, 0.5),
            blend_values=(0.05,),
        )


@pytest.mark.parametrize("heights", [(0.5, 0.5), (0.6, 0.4), (-0.1, 0.5), (0.5, 1.2)])
def test_material_layers_reject_bad_thresholds(heights: tuple) -> None:
    with pytest.raises(InvalidParameterError):
        MaterialLayers(
            layer_colors=(BLUE, GREEN, WHITE),
            layer_heights=heights,
            blend_values=(0.05, 0.05),
        )


def test_material_layers_reject_negative_blend_and_bad_colors() -> None:
    with pytest.raises(InvalidParameterError):
        MaterialLayers(
            layer_colors=(BLUE, GREEN), layer_heights=(0.5,), blend_values=(-0.1,)
        )
    with pytest.raises(InvalidParameterError):
        MaterialLayers(
            layer_colors=((0.0, 2.0, 0.0, 1.0), GREEN),
            layer_heights=(0.5,),
            blend_values=(0.1,),
        )
    with pytest.raises(InvalidParameterError):
        MaterialLayers(layer_colors=(), layer_heights=(), blend_values=())


def test_material_layers_normalise_lists_and_rgb() -> None:
    m = MaterialLayers(
        layer_colors=[[0.0, 0.0, 1.0], [1.0, 1.0, 1.0, 0.5]],
        layer_heights=[0.5],
        blend_values=[0.1],
    )
    assert m.layer_colors == ((0.0, 0.0, 1.0, 1.0), (1.0, 1.0, 1.0, 0.5))
    assert m.layer_heights == (0.5,)
    assert m.layer_count == 2
    hash(m)


def test_map_parameters_reject_bad_top_level_values() -> None:
    base = MapParameters.default()
    with pytest.raises(InvalidParameterError):
        replace(base, map_height=0.0)
    with pytest.raises(InvalidParameterError):
        replace(base, level_of_detail=7)
    with pytest.raises(InvalidParameterError):
        replace(base, level_of_detail=-1)
    with pytest.raises(InvalidParameterError):
        replace(base, noise="not noise")


def test_errors_are_value_errors() -> None:
    assert issubclass(InvalidParameterError, TerrainError)
    assert issubclass(TerrainError, ValueError)


def test_dict_round_trip() -> None:
    p = replace(
        MapParameters.default(),
        wireframe=True,
        level_of_detail=3,
        noise=NoiseParameters(seed=99, scale=12.5),
    )
    assert MapParameters.from_dict(p.to_dict()) == p


def test_from_dict_fills_defaults_and_rejects_unknown_keys() -> None:
    p = MapParameters.from_dict({"map_height": 4.0, "noise": {"octaves": 2}})
    assert p.map_height == 4.0
    assert p.noise.octaves == 2
    assert p.noise.scale == 40.0
    assert p.materials == MaterialLayers.default()

    with pytest.raises(InvalidParameterError):
        MapParameters.from_dict({"noise": {"frequency": 2.0}})
    with pytest.raises(InvalidParameterError):
        MapParameters.from_dict({"erosion": True})


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(scale="abc"),
        dict(scale="1.5"),
        dict(scale=None),
        dict(persistence=None),
        dict(lacunarity=[2.0]),
        dict(octaves=None),
        dict(octaves=True),
        dict(octaves="4"),
        dict(octaves=2.5),
        dict(seed=None),
        dict(seed=True),
    ],
)
def test_noise_parameters_reject_wrong_types(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError):
        NoiseParameters(**kwargs)


def test_octaves_accept_integral_floats() -> None:
    assert NoiseParameters(octaves=3.0).octaves == 3.0


@pytest.mark.parametrize(
    "data",
    [
        {"noise": {"octaves": None}},
        {"noise": {"scale": "abc"}},
        {"noise": [1, 2]},
        {"height_curve": {"slope": None}},
        {"level_of_detail": None},
        {"level_of_detail": True},
        {"level_of_detail": "2"},
        {"map_height": "tall"},
        {"wireframe": None},
        {"materials": {"layer_colors": None}},
        {"materials": {"layer_colors": [None, None]}},
        {
            "materials": {
                "layer_colors": ["red", "blue"],
                "layer_heights": [0.5],
                "blend_values": [0.1],
            }
        },
        {"materials": {"layer_heights": None}},
        {"materials": {"blend_values": [None, 0.1, 0.1, 0.1]}},
        {"materials": {"layer_heights": [0.2, "x", 0.5, 0.8]}},
    ],
)
def test_from_dict_reports_wrong_types_as_invalid_parameters(data: dict) -> None:
    with pytest.raises(InvalidParameterError):
        MapParameters.from_dict(data)


def test_from_dict_rejects_non_mapping_input() -> None:
    with pytest.raises(InvalidParameterError):
        MapParameters.from_dict([("map_height", 4.0)])


def test_map_parameters_reject_bool_level_of_detail() -> None:
    with pytest.raises(InvalidParameterError):
        replace(MapParameters.default(), level_of_detail=True)
