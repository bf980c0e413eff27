from __future__ import annotations

import numpy as np

SEED_LIMIT = 2**64


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    """Return the doubled 512-entry lattice hash table for ``seed``.

    Any unsigned 64-bit seed is accepted; distinct seeds shuffle the lattice
    differently, so the seed moves the whole noise field rather than offsetting
    its output.
    """

    seed = int(seed)
    if not (0 <= seed < SEED_LIMIT):
        raise ValueError(f"seed must be in [0, 2**64), got {seed}")
    rng = np.random.default_rng(seed)
    p = rng.permutation(256).astype(np.int32)
    return np.concatenate([p, p])


_GRAD2_DIAG8 = np.array(
    [
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
    ],
    dtype=np.float64,
)
_GRAD2_DIAG8 /= np.linalg.norm(_GRAD2_DIAG8, axis=1, keepdims=True)

# Unit gradients in 2D bound |noise| by sqrt(0.5).
PERLIN2_AMPLITUDE = float(np.sqrt(0.5))


def grad2_from_hash(h: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    idx = (h & 7).astype(np.int32)
    g = _GRAD2_DIAG8[idx]
    return g[..., 0], g[..., 1]
