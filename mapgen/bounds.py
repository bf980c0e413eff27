from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterBounds:
    """Editor hint for one parameter: slider range and drag step.

    These bound what an editing surface offers; they are not validation.
    Generation accepts any value that passes ``MapParameters.validate``.
    """

    min_value: float
    max_value: float
    step: float

    def clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, value))


PARAMETER_BOUNDS: dict[str, ParameterBounds] = {
    "map_height": ParameterBounds(0.1, 100.0, 0.1),
    "level_of_detail": ParameterBounds(0, 6, 1),
    # Browser number inputs are limited to 53-bit integers.
    "noise.seed": ParameterBounds(0, 2**53 - 1, 1),
    "noise.scale": ParameterBounds(0.1, 100.0, 0.1),
    "noise.octaves": ParameterBounds(1, 6, 1),
    "noise.persistence": ParameterBounds(0.0, 1.0, 0.01),
    "noise.lacunarity": ParameterBounds(1.0, 10.0, 0.01),
    "height_curve.water_level": ParameterBounds(0.0, 1.0, 0.01),
    "height_curve.slope": ParameterBounds(1.0, 5.0, 0.01),
    "materials.layer_heights": ParameterBounds(0.0, 1.0, 0.01),
    "materials.blend_values": ParameterBounds(0.0, 1.0, 0.01),
}


def bounds_for(path: str) -> ParameterBounds:
    try:
        return PARAMETER_BOUNDS[path]
    except KeyError:
        raise KeyError(f"no editor bounds for {path!r}") from None
