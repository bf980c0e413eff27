from __future__ import annotations

from mapgen.bounds import PARAMETER_BOUNDS, ParameterBounds, bounds_for
from mapgen.errors import (
    GeometryConfigurationError,
    InvalidParameterError,
    TerrainError,
)
from mapgen.generate import generate
from mapgen.height_curve import evaluate_curve
from mapgen.heightfield import Heightfield, elevation
from mapgen.log import configure_logging
from mapgen.material import (
    GeneratedMaterial,
    blend,
    build_material,
    layer_weights,
)
from mapgen.mesh import DEFAULT_GRID_SIZE, GeneratedMesh, MeshBuilder, lod_step
from mapgen.noise_field import NoiseField, octave_weights, sample
from mapgen.params import (
    HeightCurveParameters,
    MapParameters,
    MaterialLayers,
    NoiseParameters,
)

__all__ = [
    "DEFAULT_GRID_SIZE",
    "GeneratedMaterial",
    "GeneratedMesh",
    "GeometryConfigurationError",
    "HeightCurveParameters",
    "Heightfield",
    "InvalidParameterError",
    "MapParameters",
    "MaterialLayers",
    "MeshBuilder",
    "NoiseField",
    "NoiseParameters",
    "PARAMETER_BOUNDS",
    "ParameterBounds",
    "TerrainError",
    "blend",
    "bounds_for",
    "build_material",
    "configure_logging",
    "elevation",
    "evaluate_curve",
    "generate",
    "layer_weights",
    "lod_step",
    "octave_weights",
    "sample",
]
