from __future__ import annotations

import time

import structlog

from mapgen.errors import InvalidParameterError
from mapgen.heightfield import Heightfield
from mapgen.material import GeneratedMaterial, build_material
from mapgen.mesh import GeneratedMesh, MeshBuilder
from mapgen.params import MapParameters

logger = structlog.get_logger()


def generate(
    params: MapParameters,
    *,
    builder: MeshBuilder | None = None,
    interpolation: str = "linear",
) -> tuple[GeneratedMesh, GeneratedMaterial]:
    """Generate the terrain mesh and its layered material.

    Pure: the whole parameter bundle is validated before any sampling, nothing
    is cached between calls, and ``params`` is never modified. ``wireframe``
    is passed through to the material as a display hint.
    """

    if not isinstance(params, MapParameters):
        raise InvalidParameterError(
            f"expected MapParameters, got {type(params).__name__}"
        )
    params.validate()
    if builder is None:
        builder = MeshBuilder()

    t0 = time.perf_counter()
    heightfield = Heightfield.from_params(params)
    mesh = builder.build(heightfield, int(params.level_of_detail))
    material = build_material(
        mesh.heights,
        params.materials,
        wireframe=bool(params.wireframe),
        interpolation=interpolation,
    )
    logger.info(
        "Terrain generated",
        seed=int(params.noise.seed),
        level_of_detail=int(params.level_of_detail),
        vertices=mesh.vertex_count,
        triangles=mesh.triangle_count,
        elapsed_ms=round((time.perf_counter() - t0) * 1000.0, 2),
    )
    return mesh, material
