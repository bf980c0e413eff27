from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Mapping, Sequence

import numpy as np

from mapgen.errors import InvalidParameterError
from mapgen.height_curve import evaluate_curve

if TYPE_CHECKING:
    from mapgen.material import GeneratedMaterial
    from mapgen.mesh import GeneratedMesh

Color = tuple[float, float, float, float]

BLUE: Color = (0.0, 0.0, 1.0, 1.0)
GREEN: Color = (0.0, 1.0, 0.0, 1.0)
DARK_GREEN: Color = (0.0, 0.5, 0.0, 1.0)
GRAY: Color = (0.5, 0.5, 0.5, 1.0)
WHITE: Color = (1.0, 1.0, 1.0, 1.0)

MAX_OCTAVES = 6
MAX_LEVEL_OF_DETAIL = 6


def _finite(name: str, value: float) -> float:
    # float() would also parse strings like "1.5".
    if isinstance(value, (str, bytes)):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


def _integer(name: str, value: int) -> int:
    if isinstance(value, (bool, np.bool_, str, bytes)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    try:
        out = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}") from exc
    if out != value:
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    return out


def _sequence(name: str, value: Any) -> tuple:
    if isinstance(value, (str, bytes)):
        raise InvalidParameterError(f"{name} must be a sequence, got {value!r}")
    try:
        return tuple(value)
    except TypeError as exc:
        raise InvalidParameterError(f"{name} must be a sequence, got {value!r}") from exc


def _in_range(name: str, value: float, lo: float, hi: float) -> None:
    if not (lo <= value <= hi):
        raise InvalidParameterError(f"{name} must be in [{lo}, {hi}], got {value}")


def as_color(value: Sequence[float]) -> Color:
    """Coerce an RGB or RGBA sequence of 0..1 floats to an RGBA tuple."""

    comps = [_finite("color component", c) for c in _sequence("color", value)]
    if len(comps) == 3:
        comps.append(1.0)
    if len(comps) != 4:
        raise InvalidParameterError(
            f"colors need 3 or 4 components, got {len(comps)}"
        )
    for c in comps:
        if not (0.0 <= c <= 1.0):
            raise InvalidParameterError(
                f"color components must be in [0, 1], got {tuple(comps)}"
            )
    return (comps[0], comps[1], comps[2], comps[3])


@dataclass(frozen=True)
class NoiseParameters:
    seed: int = 0
    scale: float = 40.0
    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 3.0

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def default(cls) -> NoiseParameters:
        return cls()

    def validate(self) -> None:
        if isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer)):
            raise InvalidParameterError(f"seed must be an integer, got {self.seed!r}")
        if not (0 <= int(self.seed) < 2**64):
            raise InvalidParameterError(f"seed must be in [0, 2**64), got {self.seed}")
        scale = _finite("scale", self.scale)
        if scale <= 0.0:
            raise InvalidParameterError(f"scale must be > 0, got {scale}")
        _in_range("octaves", _integer("octaves", self.octaves), 1, MAX_OCTAVES)
        _in_range("persistence", _finite("persistence", self.persistence), 0.0, 1.0)
        lacunarity = _finite("lacunarity", self.lacunarity)
        if lacunarity < 1.0:
            raise InvalidParameterError(f"lacunarity must be >= 1, got {lacunarity}")


@dataclass(frozen=True)
class HeightCurveParameters:
    water_level: float = 0.25
    slope: float = 1.5

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def default(cls) -> HeightCurveParameters:
        return cls()

    def validate(self) -> None:
        _in_range("water_level", _finite("water_level", self.water_level), 0.0, 1.0)
        slope = _finite("slope", self.slope)
        if slope < 1.0:
            raise InvalidParameterError(f"slope must be >= 1, got {slope}")

    def evaluate(self, value):
        """Flatten heights below the water level and shape the rest."""
        return evaluate_curve(
            value, water_level=float(self.water_level), slope=float(self.slope)
        )


@dataclass(frozen=True)
class MaterialLayers:
    layer_colors: tuple[Color, ...] = (BLUE, GREEN, DARK_GREEN, GRAY, WHITE)
    layer_heights: tuple[float, ...] = (0.2, 0.35, 0.5, 0.8)
    blend_values: tuple[float, ...] = (0.05, 0.05, 0.1, 0.15)

    def __post_init__(self) -> None:
        # Normalise list input so instances stay hashable.
        colors = _sequence("layer_colors", self.layer_colors)
        heights = _sequence("layer_heights", self.layer_heights)
        blends = _sequence("blend_values", self.blend_values)
        object.__setattr__(self, "layer_colors", tuple(as_color(c) for c in colors))
        object.__setattr__(
            self,
            "layer_heights",
            tuple(_finite(f"layer_heights[{i}]", h) for i, h in enumerate(heights)),
        )
        object.__setattr__(
            self,
            "blend_values",
            tuple(_finite(f"blend_values[{i}]", b) for i, b in enumerate(blends)),
        )
        self.validate()

    @classmethod
    def default(cls) -> MaterialLayers:
        return cls()

    @property
    def layer_count(self) -> int:
        return len(self.layer_colors)

    def validate(self) -> None:
        n = len(self.layer_colors)
        if n < 1:
            raise InvalidParameterError("at least one layer color is required")
        if len(self.layer_heights) != n - 1:
            raise InvalidParameterError(
                f"{n} layer colors need {n - 1} layer heights, "
                f"got {len(self.layer_heights)}"
            )
        if len(self.blend_values) != len(self.layer_heights):
            raise InvalidParameterError(
                f"blend_values must match layer_heights in length "
                f"({len(self.blend_values)} != {len(self.layer_heights)})"
            )
        for i, h in enumerate(self.layer_heights):
            _in_range(f"layer_heights[{i}]", _finite(f"layer_heights[{i}]", h), 0.0, 1.0)
        for a, b in zip(self.layer_heights, self.layer_heights[1:]):
            if not (b > a):
                raise InvalidParameterError(
                    f"layer_heights must be strictly increasing, got {self.layer_heights}"
                )
        for i, b in enumerate(self.blend_values):
            if _finite(f"blend_values[{i}]", b) < 0.0:
                raise InvalidParameterError(
                    f"blend_values[{i}] must be >= 0, got {b}"
                )


@dataclass(frozen=True)
class MapParameters:
    """Complete parameter snapshot for one terrain map."""

    wireframe: bool = False
    map_height: float = 10.0
    level_of_detail: int = 0
    noise: NoiseParameters = field(default_factory=NoiseParameters)
    height_curve: HeightCurveParameters = field(default_factory=HeightCurveParameters)
    materials: MaterialLayers = field(default_factory=MaterialLayers)

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def default(cls) -> MapParameters:
        return cls()

    @classmethod
    def new(cls) -> MapParameters:
        return cls.default()

    def validate(self) -> None:
        if not isinstance(self.wireframe, (bool, np.bool_)):
            raise InvalidParameterError(
                f"wireframe must be a bool, got {self.wireframe!r}"
            )
        map_height = _finite("map_height", self.map_height)
        if map_height <= 0.0:
            raise InvalidParameterError(f"map_height must be > 0, got {map_height}")
        _in_range(
            "level_of_detail",
            _integer("level_of_detail", self.level_of_detail),
            0,
            MAX_LEVEL_OF_DETAIL,
        )
        for name, kind in (
            ("noise", NoiseParameters),
            ("height_curve", HeightCurveParameters),
            ("materials", MaterialLayers),
        ):
            group = getattr(self, name)
            if not isinstance(group, kind):
                raise InvalidParameterError(
                    f"{name} must be {kind.__name__}, got {type(group).__name__}"
                )
            group.validate()

    def generate(self) -> tuple[GeneratedMesh, GeneratedMaterial]:
        from mapgen.generate import generate

        return generate(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "wireframe": bool(self.wireframe),
            "map_height": float(self.map_height),
            "level_of_detail": int(self.level_of_detail),
            "noise": {f.name: getattr(self.noise, f.name) for f in fields(self.noise)},
            "height_curve": {
                f.name: getattr(self.height_curve, f.name)
                for f in fields(self.height_curve)
            },
            "materials": {
                "layer_colors": [list(c) for c in self.materials.layer_colors],
                "layer_heights": list(self.materials.layer_heights),
                "blend_values": list(self.materials.blend_values),
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MapParameters:
        """Build parameters from a (possibly partial) plain mapping.

        Missing keys fall back to defaults; unknown keys are rejected.
        """

        def pick(kind: type, raw: Any, name: str) -> dict[str, Any]:
            if raw is None:
                raw = {}
            if not isinstance(raw, Mapping):
                raise InvalidParameterError(
                    f"{name} must be a mapping, got {type(raw).__name__}"
                )
            raw = dict(raw)
            known = {f.name for f in fields(kind)}
            unknown = sorted(set(raw) - known)
            if unknown:
                raise InvalidParameterError(f"unknown {name} keys: {unknown}")
            return raw

        top = pick(cls, data, "map")
        noise = NoiseParameters(**pick(NoiseParameters, top.pop("noise", None), "noise"))
        curve = HeightCurveParameters(
            **pick(HeightCurveParameters, top.pop("height_curve", None), "height_curve")
        )
        materials = MaterialLayers(
            **pick(MaterialLayers, top.pop("materials", None), "materials")
        )
        return cls(noise=noise, height_curve=curve, materials=materials, **top)
