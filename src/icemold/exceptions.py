"""Exception hierarchy for icemold."""


class IceMoldError(Exception):
    """Base exception for all icemold errors."""

    pass


class FontError(IceMoldError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontNotLoadedError(FontError):
    """A font was required but the repository has not finished loading it."""

    def __init__(self) -> None:
        super().__init__("Font not loaded yet")


class GeometryError(IceMoldError):
    """Errors in geometric calculations."""

    pass


class ClippingError(GeometryError):
    """The polygon clipping engine rejected its input."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Clipping {operation} failed: {reason}")


class ExtrusionError(GeometryError):
    """Error building an extruded solid."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Extrusion failed: {reason}")
