from __future__ import annotations

from typing import Protocol

import numpy as np

from .core import fade, grad2_from_hash, lerp, make_permutation


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


class Perlin2D:
    """Seeded 2D gradient noise with values in [-sqrt(0.5), sqrt(0.5)]."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xfloor = np.floor(x)
        yfloor = np.floor(y)
        xi0 = xfloor.astype(np.int64) & 255
        yi0 = yfloor.astype(np.int64) & 255
        xi1 = (xi0 + 1) & 255
        yi1 = (yi0 + 1) & 255

        xf = x - xfloor
        yf = y - yfloor
        u = fade(xf)
        v = fade(yf)

        p = self.perm
        aa = p[p[xi0] + yi0]
        ab = p[p[xi0] + yi1]
        ba = p[p[xi1] + yi0]
        bb = p[p[xi1] + yi1]

        gxaa, gyaa = grad2_from_hash(aa)
        gxab, gyab = grad2_from_hash(ab)
        gxba, gyba = grad2_from_hash(ba)
        gxbb, gybb = grad2_from_hash(bb)

        d00 = gxaa * xf + gyaa * yf
        d01 = gxab * xf + gyab * (yf - 1.0)
        d10 = gxba * (xf - 1.0) + gyba * yf
        d11 = gxbb * (xf - 1.0) + gybb * (yf - 1.0)

        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return lerp(x_lerp0, x_lerp1, v)


def fbm2(
    noise: Noise2D,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int = 4,
    lacunarity: float = 2.0,
    persistence: float = 0.5,
) -> np.ndarray:
    """Fractal sum of ``octaves`` noise layers, divided by the amplitude sum.

    Octave ``o`` is sampled at frequency ``lacunarity**o`` with weight
    ``persistence**o``, so the result stays within the base noise range.
    """

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    octaves = int(octaves)
    lacunarity = float(lacunarity)
    persistence = float(persistence)
    if octaves < 1:
        raise ValueError("octaves must be >= 1")

    amp = 1.0
    freq = 1.0
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amp_sum = 0.0

    for _ in range(octaves):
        if amp > 0.0:
            total += amp * noise.noise(x * freq, y * freq)
        amp_sum += amp
        amp *= persistence
        freq *= lacunarity

    return total / amp_sum
