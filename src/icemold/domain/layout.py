"""Text layout records."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CharacterPlacement:
    """Where one character of a stacked block is drawn.

    Attributes:
        char: The character
        x: Translation applied to the character's outline (mm)
        y: Translation applied to the character's outline (mm)
    """

    char: str
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class TextBounds:
    """Axis-aligned bounding box in millimeters, Y up."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center_x(self) -> float:
        return (self.x_min + self.x_max) / 2

    @property
    def center_y(self) -> float:
        return (self.y_min + self.y_max) / 2

    def translated(self, dx: float, dy: float) -> "TextBounds":
        """Return a copy moved by (dx, dy)."""
        return TextBounds(self.x_min + dx, self.y_min + dy, self.x_max + dx, self.y_max + dy)

    def union(self, other: "TextBounds") -> "TextBounds":
        """Smallest box containing both boxes."""
        return TextBounds(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max),
        )


EMPTY_BOUNDS = TextBounds(0.0, 0.0, 0.0, 0.0)
