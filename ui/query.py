from __future__ import annotations

from mapgen.params import MapParameters


def rgba_to_hex(rgba: tuple[float, ...]) -> str:
    r, g, b = (max(0, min(255, round(c * 255.0))) for c in rgba[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgba(value: str) -> tuple[float, float, float, float]:
    value = value.strip().lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected a #rrggbb color, got {value!r}")
    r, g, b = (int(value[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return (r, g, b, 1.0)


def params_to_query(params: MapParameters) -> dict[str, str]:
    """Flatten parameters into URL query keys.

    Scalars use dotted paths (``noise.seed``); per-layer values add the
    tuple index (``materials.layer_heights.0``). Colors are stored as hex
    without the leading ``#``.
    """

    flat = params.to_dict()
    query = {
        "wireframe": "1" if params.wireframe else "0",
        "map_height": str(params.map_height),
        "level_of_detail": str(params.level_of_detail),
    }
    for group in ("noise", "height_curve"):
        for k, v in flat[group].items():
            query[f"{group}.{k}"] = str(v)

    m = params.materials
    for i, color in enumerate(m.layer_colors):
        query[f"materials.layer_colors.{i}"] = rgba_to_hex(color).lstrip("#")
    for i, (h, b) in enumerate(zip(m.layer_heights, m.blend_values)):
        query[f"materials.layer_heights.{i}"] = str(h)
        query[f"materials.blend_values.{i}"] = str(b)
    return query
