import io

import numpy as np
import pytest
from PIL import Image

from mapgen.generate import generate
from mapgen.mesh import MeshBuilder
from mapgen.params import MapParameters
from viz.export import (
    array_to_png_bytes,
    material_ramp_png_bytes,
    mesh_color_png_bytes,
    mesh_height_png_bytes,
    rgba_to_png_bytes,
)


def _terrain():
    return generate(MapParameters.default(), builder=MeshBuilder(size=25))


def test_array_to_png_bytes_roundtrip():
    z = np.arange(12, dtype=np.float64).reshape(3, 4)
    data = array_to_png_bytes(z)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"

    img = Image.open(io.BytesIO(data))
    assert img.size == (4, 3)


def test_array_to_png_bytes_constant_map():
    z = np.full((5, 6), 7.0, dtype=np.float64)
    data = array_to_png_bytes(z)
    img = Image.open(io.BytesIO(data))
    arr = np.array(img)
    assert arr.min() == 0
    assert arr.max() == 0


def test_rgba_to_png_bytes_requires_four_channels():
    with pytest.raises(ValueError):
        rgba_to_png_bytes(np.zeros((2, 2, 3)))


def test_mesh_previews_match_grid():
    mesh, material = _terrain()
    rows, cols = mesh.grid_shape

    h = Image.open(io.BytesIO(mesh_height_png_bytes(mesh)))
    assert h.size == (cols, rows)

    c = Image.open(io.BytesIO(mesh_color_png_bytes(mesh, material)))
    assert c.size == (cols, rows)
    assert c.mode == "RGBA"


def test_material_ramp_colors():
    _, material = _terrain()
    img = Image.open(io.BytesIO(material_ramp_png_bytes(material, width=64, height=4)))
    assert img.size == (64, 4)
    arr = np.array(img)
    assert tuple(arr[0, 0]) == (0, 0, 255, 255)
    assert tuple(arr[0, -1]) == (255, 255, 255, 255)
