from .core import PERLIN2_AMPLITUDE
from .noise_2d import Perlin2D, fbm2

__all__ = ["PERLIN2_AMPLITUDE", "Perlin2D", "fbm2"]
