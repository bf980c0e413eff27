from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import structlog

from mapgen.errors import GeometryConfigurationError
from mapgen.heightfield import Heightfield

logger = structlog.get_logger()

# 240 is divisible by every LOD step (1, 2, 4, ..., 12).
DEFAULT_GRID_SIZE = 241


def lod_step(level_of_detail: int) -> int:
    """Grid stride for a level of detail: 1 at LOD 0, then 2 * LOD.

    The stride does not double per level. LODs 0..6 give 1, 2, 4, 6, 8, 10
    and 12, which all divide the 240 cells of the default 241-vertex grid, so
    every level keeps the grid edges. Vertex counts fall roughly as
    1 / LOD**2 rather than halving per level.
    """
    lod = int(level_of_detail)
    if lod < 0:
        raise GeometryConfigurationError(
            f"level_of_detail must be >= 0, got {level_of_detail}"
        )
    return 1 if lod == 0 else lod * 2


def _readonly(a: np.ndarray) -> np.ndarray:
    a = np.ascontiguousarray(a)
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class GeneratedMesh:
    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    uvs: np.ndarray
    heights: np.ndarray
    grid_shape: tuple[int, int]

    def __post_init__(self) -> None:
        for name in ("positions", "normals", "indices", "uvs", "heights"):
            object.__setattr__(self, name, _readonly(getattr(self, name)))

    def __setstate__(self, state: dict) -> None:
        # Unpickling skips __post_init__; arrays come back writable otherwise.
        self.__dict__.update(state)
        self.__post_init__()

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    def edges(self) -> np.ndarray:
        """Unique undirected edges as an Ex2 index array, for wireframe display."""
        tri = np.asarray(self.indices, dtype=np.int64)
        pairs = np.concatenate([tri[:, [0, 1]], tri[:, [1, 2]], tri[:, [2, 0]]])
        pairs.sort(axis=1)
        return np.unique(pairs, axis=0).astype(np.uint32)


def grid_indices(rows: int, cols: int) -> np.ndarray:
    """Two counter-clockwise (seen from +y) triangles per grid cell."""

    r, c = np.mgrid[0 : rows - 1, 0 : cols - 1]
    a = (r * cols + c).ravel()
    b = a + 1
    d = a + cols
    e = d + 1
    tris = np.stack(
        [np.stack([a, d, b], axis=1), np.stack([b, d, e], axis=1)], axis=1
    )
    return tris.reshape(-1, 3).astype(np.uint32)


def grid_normals(y: np.ndarray, *, dx: float, dz: float) -> np.ndarray:
    """Unit normals of a height grid from central differences."""

    y = np.asarray(y, dtype=np.float64)
    dydz, dydx = np.gradient(y, float(dz), float(dx))
    n = np.stack([-dydx, np.ones_like(y), -dydz], axis=-1)
    n /= np.linalg.norm(n, axis=-1, keepdims=True)
    return n.reshape(-1, 3)


class MeshBuilder:
    """Triangulates a heightfield on a square or rectangular grid.

    ``size`` and ``depth`` count base-resolution vertices along x and z;
    ``cell_size`` is the world distance between them. The grid is centred on
    the origin.
    """

    def __init__(
        self,
        *,
        size: int = DEFAULT_GRID_SIZE,
        depth: int | None = None,
        cell_size: float = 1.0,
    ):
        self.size = int(size)
        self.depth = self.size if depth is None else int(depth)
        self.cell_size = float(cell_size)
        if self.size < 2 or self.depth < 2:
            raise GeometryConfigurationError(
                f"grid needs at least 2x2 vertices, got {self.size}x{self.depth}"
            )
        if not np.isfinite(self.cell_size) or self.cell_size <= 0.0:
            raise GeometryConfigurationError(
                f"cell_size must be > 0, got {self.cell_size}"
            )

    def grid_shape(self, level_of_detail: int) -> tuple[int, int]:
        """(rows, cols) of the strided grid at ``level_of_detail``."""

        step = lod_step(level_of_detail)
        for name, n in (("size", self.size), ("depth", self.depth)):
            if (n - 1) % step != 0:
                raise GeometryConfigurationError(
                    f"{name}-1={n - 1} is not divisible by step {step} "
                    f"(level_of_detail={level_of_detail})"
                )
        rows = (self.depth - 1) // step + 1
        cols = (self.size - 1) // step + 1
        if rows < 2 or cols < 2:
            raise GeometryConfigurationError(
                f"level_of_detail={level_of_detail} leaves a {cols}x{rows} grid"
            )
        return rows, cols

    def vertex_count(self, level_of_detail: int) -> int:
        rows, cols = self.grid_shape(level_of_detail)
        return rows * cols

    def triangle_count(self, level_of_detail: int) -> int:
        rows, cols = self.grid_shape(level_of_detail)
        return 2 * (rows - 1) * (cols - 1)

    def build(self, heightfield: Heightfield, level_of_detail: int) -> GeneratedMesh:
        rows, cols = self.grid_shape(level_of_detail)
        spacing = lod_step(level_of_detail) * self.cell_size

        xs = np.arange(cols, dtype=np.float64) * spacing
        zs = np.arange(rows, dtype=np.float64) * spacing
        xs -= 0.5 * (self.size - 1) * self.cell_size
        zs -= 0.5 * (self.depth - 1) * self.cell_size
        xg, zg = np.meshgrid(xs, zs)

        # Height pass; normals below need the complete grid.
        h01 = np.asarray(heightfield.normalized(xg, zg), dtype=np.float64)
        y = h01 * heightfield.map_height

        normals = grid_normals(y, dx=spacing, dz=spacing)
        positions = np.stack([xg.ravel(), y.ravel(), zg.ravel()], axis=1)

        ug, vg = np.meshgrid(
            np.linspace(0.0, 1.0, cols, dtype=np.float64),
            np.linspace(0.0, 1.0, rows, dtype=np.float64),
        )
        uvs = np.stack([ug.ravel(), vg.ravel()], axis=1)

        mesh = GeneratedMesh(
            positions=positions,
            normals=normals,
            indices=grid_indices(rows, cols),
            uvs=uvs,
            heights=h01.ravel(),
            grid_shape=(rows, cols),
        )
        logger.debug(
            "Mesh built",
            level_of_detail=int(level_of_detail),
            rows=rows,
            cols=cols,
            triangles=mesh.triangle_count,
        )
        return mesh
