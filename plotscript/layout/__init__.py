"""
Page layout module.

Places the graphs of a multiplot page as tiles on the unit page square.
"""

from plotscript.layout.grid import (
    GraphLayout,
    GridGraphLayout,
    LayoutError,
    LayoutMetrics,
)

__all__ = ["GraphLayout", "GridGraphLayout", "LayoutError", "LayoutMetrics"]
