"""icemold - Glyph outlines to ice-pop mold cavity geometry.

icemold turns 1-4 typed characters into closed 2D polygons with proper
outer/hole structure, optionally outlines and merges them with integer
polygon clipping, and extrudes the result into solids placed inside a
fixed-size ice-pop mold cavity.

Example:
    $ icemold NotoSansJP-Bold.otf 鎌倉 --fill --fill-offset 3

This prints a summary of the generated shapes and can write them as JSON
for a drawing front end.
"""

__version__ = "0.1.0"
__author__ = "Ice CAD contributors"

__all__ = ["__author__", "__version__"]
