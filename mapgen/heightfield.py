from __future__ import annotations

import numpy as np

from mapgen.errors import InvalidParameterError
from mapgen.noise_field import NoiseField
from mapgen.params import HeightCurveParameters, MapParameters, NoiseParameters


class Heightfield:
    """Elevation at any (x, z): noise, then the height curve, then map height."""

    def __init__(
        self,
        noise: NoiseParameters,
        height_curve: HeightCurveParameters,
        map_height: float,
    ):
        map_height = float(map_height)
        if not np.isfinite(map_height) or map_height <= 0.0:
            raise InvalidParameterError(f"map_height must be > 0, got {map_height}")
        height_curve.validate()
        self.noise = NoiseField(noise)
        self.height_curve = height_curve
        self.map_height = map_height

    @classmethod
    def from_params(cls, params: MapParameters) -> Heightfield:
        return cls(params.noise, params.height_curve, params.map_height)

    def normalized(self, x, z):
        """Curve-shaped height in [0, 1]."""
        return self.height_curve.evaluate(self.noise.sample(x, z))

    def elevation(self, x, z):
        h = self.normalized(x, z)
        if np.ndim(h) == 0:
            return float(h) * self.map_height
        return h * self.map_height


def elevation(x, z, params: MapParameters):
    return Heightfield.from_params(params).elevation(x, z)
