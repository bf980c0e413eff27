from __future__ import annotations

import io

import numpy as np
from PIL import Image

from mapgen.material import GeneratedMaterial
from mapgen.mesh import GeneratedMesh


def array_to_png_bytes(z: np.ndarray) -> bytes:
    """Convert a 2D array to an 8-bit grayscale PNG.

    Values are min/max normalized to [0, 255]. Degenerate (constant) arrays
    become all zeros.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    zmin = float(np.min(z))
    zmax = float(np.max(z))
    if zmax == zmin:
        img = np.zeros(z.shape, dtype=np.uint8)
    else:
        zn = (z - zmin) / (zmax - zmin)
        img = np.clip(zn * 255.0, 0.0, 255.0).astype(np.uint8)

    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def rgba_to_png_bytes(rgba01: np.ndarray) -> bytes:
    rgba = np.asarray(rgba01, dtype=np.float64)
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("expected an HxWx4 array")
    img = np.clip(rgba * 255.0 + 0.5, 0.0, 255.0).astype(np.uint8)
    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def mesh_height_png_bytes(mesh: GeneratedMesh) -> bytes:
    """Top-down grayscale preview of a mesh's normalized heights."""
    return array_to_png_bytes(mesh.heights.reshape(mesh.grid_shape))


def material_ramp_png_bytes(
    material: GeneratedMaterial, *, width: int = 256, height: int = 16
) -> bytes:
    """Horizontal colour ramp, low heights on the left."""
    width = int(width)
    height = int(height)
    if width < 2 or height < 1:
        raise ValueError("ramp must be at least 2x1")
    ramp = material.gradient(width)
    return rgba_to_png_bytes(np.repeat(ramp[None, :, :], height, axis=0))


def mesh_color_png_bytes(mesh: GeneratedMesh, material: GeneratedMaterial) -> bytes:
    """Top-down preview of the blended vertex colours."""
    rows, cols = mesh.grid_shape
    return rgba_to_png_bytes(material.vertex_colors.reshape(rows, cols, 4))
