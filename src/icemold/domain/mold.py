"""Mold dimension table and the user parameter record.

``MoldGeometry`` holds the fixed manufacturing dimensions of the ice-pop
mold (all values in millimeters or degrees). It is read-only input for the
placement step and for drawing front ends. ``MoldParameters`` is the record
a front end sends for every re-render; ranges are enforced by the front end,
not here.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class MoldGeometry:
    """Fixed manufacturing dimensions of the mold.

    Attributes:
        outer_width: Overall width across the flange
        outer_length: Overall length across the flange
        total_height: Flange face to bottom
        inner_width: Width inside the flange
        inner_length: Length inside the flange
        cavity_width: Maximum width of the product area
        cavity_length: Maximum length of the product area
        depth_inner: Inner depth from the flange face
        depth_step: Depth to the step
        depth_text: Engraving depth of the text
        stick_slot_width: Full width of the stick slot
        stick_slot_half: Stick slot half width
        stick_slot_height: Structural height of the stick section
        outer_radius: Outer corner radius
        inner_radius: Inner corner radius
        draft_angle_side: Side wall draft in degrees
        draft_angle_stick: Stick section draft in degrees
        flange_width: Computed flange width
        flange_indicated: Flange width as indicated on the drawing
        offset_corner: Small corner offset in the section view
        material_thickness: Sheet thickness
    """

    outer_width: float = 76.91
    outer_length: float = 113.91
    total_height: float = 24.60
    inner_width: float = 70.00
    inner_length: float = 107.00
    cavity_width: float = 57.90
    cavity_length: float = 97.30
    depth_inner: float = 24.50
    depth_step: float = 21.50
    depth_text: float = 3.00
    stick_slot_width: float = 14.00
    stick_slot_half: float = 7.00
    stick_slot_height: float = 12.00
    outer_radius: float = 9.46
    inner_radius: float = 6.00
    draft_angle_side: float = 8.0
    draft_angle_stick: float = 4.0
    flange_width: float = 3.455
    flange_indicated: float = 3.40
    offset_corner: float = 1.72
    material_thickness: float = 0.1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)


ICE_POP_MOLD = MoldGeometry()


@dataclass
class MoldParameters:
    """User-controlled parameters for one render.

    Attributes:
        text: Characters to engrave, stacked top to bottom
        offset_x: Horizontal block offset in millimeters
        offset_y: Vertical block offset in millimeters
        scale: Font size scale in percent
        rotation: Block rotation in degrees
        fill_text: Outline and merge the characters
        fill_offset: Outline offset in millimeters
    """

    text: str = "鎌倉"
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 100.0
    rotation: float = 0.0
    fill_text: bool = False
    fill_offset: float = 3.0

    @property
    def characters(self) -> list[str]:
        """Characters in stacking order."""
        return list(self.text)
