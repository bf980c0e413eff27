from __future__ import annotations

import time
from dataclasses import replace

from mapgen import MapParameters, configure_logging, generate
from mapgen.params import MAX_LEVEL_OF_DETAIL


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark of full terrain generation at every LOD.

    Intended target (laptop-class CPU): LOD 0 on the default 241x241 grid
    in well under ~150ms.
    """

    configure_logging("WARNING")
    base = MapParameters.default()

    for lod in range(MAX_LEVEL_OF_DETAIL + 1):
        params = replace(base, level_of_detail=lod)
        mesh, _ = generate(params)
        _timeit(
            f"generate LOD {lod} ({mesh.vertex_count} vertices)",
            lambda: generate(params),
        )


if __name__ == "__main__":
    main()
