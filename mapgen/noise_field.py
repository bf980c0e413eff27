from __future__ import annotations

import numpy as np

from mapgen.errors import InvalidParameterError
from mapgen.params import NoiseParameters
from perlin import PERLIN2_AMPLITUDE, Perlin2D, fbm2


def octave_weights(params: NoiseParameters) -> np.ndarray:
    """Normalized contribution of each octave to the fractal sum."""
    amps = float(params.persistence) ** np.arange(int(params.octaves), dtype=np.float64)
    return amps / float(np.sum(amps))


class NoiseField:
    """Fractal noise bound to one set of noise parameters.

    The seeded Perlin lattice is built once per instance; sampling is
    read-only afterwards, so one field can be shared across callers.
    """

    def __init__(self, params: NoiseParameters):
        if not isinstance(params, NoiseParameters):
            raise InvalidParameterError(
                f"expected NoiseParameters, got {type(params).__name__}"
            )
        params.validate()
        self.params = params
        self.perlin = Perlin2D(seed=int(params.seed))

    def raw(self, x: np.ndarray, z: np.ndarray) -> np.ndarray:
        """Fractal noise in [-1, 1] before rescaling."""
        p = self.params
        scale = float(p.scale)
        x = np.asarray(x, dtype=np.float64) / scale
        z = np.asarray(z, dtype=np.float64) / scale
        total = fbm2(
            self.perlin,
            x,
            z,
            octaves=int(p.octaves),
            lacunarity=float(p.lacunarity),
            persistence=float(p.persistence),
        )
        return np.clip(total / PERLIN2_AMPLITUDE, -1.0, 1.0)

    def sample(self, x, z):
        """Noise value in [0, 1] at world coordinates ``(x, z)``."""
        out = (self.raw(x, z) + 1.0) * 0.5
        if np.ndim(out) == 0:
            return float(out)
        return out


def sample(x, z, params: NoiseParameters):
    return NoiseField(params).sample(x, z)
