from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mapgen.errors import InvalidParameterError
from mapgen.params import MaterialLayers

INTERPOLATIONS = ("linear", "smoothstep")


def _threshold_weight(
    h: np.ndarray, threshold: float, half_width: float, interpolation: str
) -> np.ndarray:
    """Progress from the layer below to the layer above a threshold, in [0, 1]."""

    if half_width <= 0.0:
        return np.heaviside(h - threshold, 0.5)
    t = np.clip((h - (threshold - half_width)) / (2.0 * half_width), 0.0, 1.0)
    if interpolation == "smoothstep":
        return t * t * (3.0 - 2.0 * t)
    return t


def layer_weights(
    heights, layers: MaterialLayers, *, interpolation: str = "linear"
) -> np.ndarray:
    """Per-layer blend weights for each height, shape ``heights.shape + (L,)``.

    Starting from the first colour, each threshold lerps towards the next
    layer by its window weight. Weights sum to 1 and are exactly one-hot for
    heights outside every blend window.
    """

    if interpolation not in INTERPOLATIONS:
        raise InvalidParameterError(
            f"interpolation must be one of {INTERPOLATIONS}, got {interpolation!r}"
        )
    layers.validate()
    h = np.asarray(heights, dtype=np.float64)
    n_layers = layers.layer_count

    if n_layers == 1:
        return np.ones(h.shape + (1,), dtype=np.float64)

    w = np.stack(
        [
            _threshold_weight(h, float(t), float(b), interpolation)
            for t, b in zip(layers.layer_heights, layers.blend_values)
        ],
        axis=-1,
    )

    # tail[..., k] = product of (1 - w_j) for j >= k
    keep = 1.0 - w
    tail = np.cumprod(keep[..., ::-1], axis=-1)[..., ::-1]
    tail = np.concatenate([tail, np.ones(h.shape + (1,), dtype=np.float64)], axis=-1)

    out = np.empty(h.shape + (n_layers,), dtype=np.float64)
    out[..., 0] = tail[..., 0]
    out[..., 1:] = w * tail[..., 1:]
    return out


def blend(heights, layers: MaterialLayers, *, interpolation: str = "linear") -> np.ndarray:
    """RGBA colour for each height, shape ``heights.shape + (4,)``."""
    weights = layer_weights(heights, layers, interpolation=interpolation)
    colors = np.asarray(layers.layer_colors, dtype=np.float64)
    return weights @ colors


@dataclass(frozen=True, eq=False)
class GeneratedMaterial:
    """Layer parameters for GPU-side blending plus precomputed vertex colours."""

    layer_colors: np.ndarray
    layer_heights: np.ndarray
    blend_values: np.ndarray
    vertex_colors: np.ndarray
    vertex_weights: np.ndarray
    wireframe: bool = False
    interpolation: str = "linear"

    def __post_init__(self) -> None:
        for name in (
            "layer_colors",
            "layer_heights",
            "blend_values",
            "vertex_colors",
            "vertex_weights",
        ):
            a = np.ascontiguousarray(getattr(self, name), dtype=np.float64)
            a.setflags(write=False)
            object.__setattr__(self, name, a)

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        self.__post_init__()

    @property
    def layers(self) -> MaterialLayers:
        return MaterialLayers(
            layer_colors=tuple(tuple(c) for c in self.layer_colors.tolist()),
            layer_heights=tuple(self.layer_heights.tolist()),
            blend_values=tuple(self.blend_values.tolist()),
        )

    def gradient(self, samples: int = 256) -> np.ndarray:
        """Colour ramp over normalized heights 0..1, shape (samples, 4)."""
        samples = int(samples)
        if samples < 2:
            raise InvalidParameterError("gradient needs at least 2 samples")
        h = np.linspace(0.0, 1.0, samples, dtype=np.float64)
        return blend(h, self.layers, interpolation=self.interpolation)

    def uniforms(self) -> dict[str, object]:
        """Plain shader-parameter bundle for rendering adapters."""
        return {
            "layer_count": int(self.layer_colors.shape[0]),
            "layer_colors": self.layer_colors.tolist(),
            "layer_heights": self.layer_heights.tolist(),
            "blend_values": self.blend_values.tolist(),
            "interpolation": self.interpolation,
        }


def build_material(
    heights,
    layers: MaterialLayers,
    *,
    wireframe: bool = False,
    interpolation: str = "linear",
) -> GeneratedMaterial:
    h = np.asarray(heights, dtype=np.float64).reshape(-1)
    weights = layer_weights(h, layers, interpolation=interpolation)
    colors = np.asarray(layers.layer_colors, dtype=np.float64)
    return GeneratedMaterial(
        layer_colors=colors,
        layer_heights=np.asarray(layers.layer_heights, dtype=np.float64),
        blend_values=np.asarray(layers.blend_values, dtype=np.float64),
        vertex_colors=weights @ colors,
        vertex_weights=weights,
        wireframe=bool(wireframe),
        interpolation=str(interpolation),
    )
