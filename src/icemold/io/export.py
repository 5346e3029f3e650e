"""JSON export of text outlines for drawing front ends."""

import json
from pathlib import Path
from typing import Any

from icemold.domain import MoldGeometry, MoldParameters, ShapeWithHoles


def shapes_to_dict(
    shapes: list[ShapeWithHoles],
    params: MoldParameters | None = None,
    font_size: float | None = None,
    mold: MoldGeometry | None = None,
) -> dict[str, Any]:
    """Serialize shapes plus optional render context.

    Args:
        shapes: Outlines in millimeters, Y up
        params: Parameters the shapes were built from
        font_size: Fitted font size (mm)
        mold: Mold dimension table to embed

    Returns:
        JSON-compatible dictionary
    """
    data: dict[str, Any] = {
        "units": "mm",
        "shapes": [shape.to_dict() for shape in shapes],
    }
    if params is not None:
        data["parameters"] = {
            "text": params.text,
            "offset_x": params.offset_x,
            "offset_y": params.offset_y,
            "scale": params.scale,
            "rotation": params.rotation,
            "fill_text": params.fill_text,
            "fill_offset": params.fill_offset,
        }
    if font_size is not None:
        data["font_size"] = font_size
    if mold is not None:
        data["mold"] = mold.to_dict()
    return data


def shapes_from_dict(data: dict[str, Any]) -> list[ShapeWithHoles]:
    """Inverse of :func:`shapes_to_dict` for the shape list."""
    return [ShapeWithHoles.from_dict(item) for item in data["shapes"]]


def write_shapes(path: Path, data: dict[str, Any]) -> int:
    """Write an exported dictionary as UTF-8 JSON.

    Returns:
        Size of the written file in bytes
    """
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path.stat().st_size
