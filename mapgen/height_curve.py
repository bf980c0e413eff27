from __future__ import annotations

import numpy as np


def evaluate_curve(value, *, water_level: float, slope: float):
    """Remap a normalized height in [0, 1] through the height curve.

    Inputs below ``water_level`` collapse to 0 so water and lowlands share one
    plane; the rest is rescaled to [0, 1] and raised to ``slope``. Accepts
    scalars or arrays and returns the same kind.
    """

    water_level = float(water_level)
    slope = float(slope)
    x = np.asarray(value, dtype=np.float64)

    if water_level >= 1.0:
        out = np.where(x >= 1.0, 1.0, 0.0)
    else:
        t = np.clip((x - water_level) / (1.0 - water_level), 0.0, 1.0)
        out = np.where(x < water_level, 0.0, t**slope)

    if out.ndim == 0:
        return float(out)
    return out
