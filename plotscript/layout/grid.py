"""Page layout for multiplot output.

A layout maps a graph index to a tile on the unit page square.  The
tile is a :class:`LayoutMetrics` rectangle in normalized page
coordinates, origin at the bottom-left, +Y pointing up (the gnuplot
``set origin`` / ``set size`` convention).

Grid placement
--------------
:class:`GridGraphLayout` fills a uniform ``rows x cols`` grid in
row-major order.  Row 0 is the topmost band, so the first graph lands
in the top-left corner::

    +-----+-----+-----+
    |  0  |  1  |  2  |     rows = 2, cols = 3
    +-----+-----+-----+
    |  3  |  4  |  5  |
    +-----+-----+-----+

Grid sizing picks the grid with the fewest cells that still holds every
graph, which is always exactly ``n`` cells.  Among the factor pairs of
``n`` the most square one wins, and its wider side goes to the columns
unless ``prefer_columns`` is ``False``.  A prime count therefore lays
out as a single strip.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class LayoutError(Exception):
    """Raised on invalid layout dimensions or an out-of-range tile index."""

    pass


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Normalized origin and extent of one tile on the unit page.

    Parameters
    ----------
    x, y : float
        Bottom-left corner of the tile, in ``[0, 1]``.
    width, height : float
        Tile extent, in ``[0, 1]``.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            val = getattr(self, name)
            if not 0.0 <= val <= 1.0:
                raise ValueError(
                    f"LayoutMetrics {name} must be in [0, 1], got {val}"
                )

    @property
    def area(self) -> float:
        return self.width * self.height


# ---------------------------------------------------------------------------
# Layout strategies
# ---------------------------------------------------------------------------


class GraphLayout(ABC):
    """Capability: place graph ``index`` out of ``capacity`` on the page."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Number of graphs the layout is currently sized for."""

    @abstractmethod
    def update_capacity(self, n: int) -> None:
        """Resize the layout so that ``n`` graphs fit."""

    @abstractmethod
    def get_metrics(self, index: int) -> LayoutMetrics:
        """Return the tile for graph ``index``."""


def _check_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutError(
            f"Grid {name} must be an integer, got {type(value).__name__}"
        )
    if value < 1:
        raise LayoutError(f"Grid {name} must be >= 1, got {value}")
    return value


class GridGraphLayout(GraphLayout):
    """Uniform row-major grid.

    Parameters
    ----------
    rows, cols : int
        Initial grid dimensions.  Both must be positive.
    prefer_columns : bool
        When the grid cannot be square, give the longer side to the
        columns (``cols >= rows``).  ``False`` gives it to the rows.

    Raises
    ------
    LayoutError
        If either dimension is not a positive integer.
    """

    def __init__(
        self, rows: int = 1, cols: int = 1, prefer_columns: bool = True,
    ) -> None:
        self._rows = _check_dimension("rows", rows)
        self._cols = _check_dimension("cols", cols)
        self._capacity = self._rows * self._cols
        self.prefer_columns = prefer_columns

    def __repr__(self) -> str:
        return (
            f"GridGraphLayout(rows={self._rows}, cols={self._cols}, "
            f"capacity={self._capacity})"
        )

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cell_count(self) -> int:
        """Total tiles in the grid (``>= capacity``)."""
        return self._rows * self._cols

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    @staticmethod
    def grid_for(n: int, prefer_columns: bool = True) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the smallest grid holding *n* tiles.

        Parameters
        ----------
        n : int
            Number of tiles required, ``>= 1``.
        prefer_columns : bool
            Orientation of a non-square grid: ``cols >= rows`` when true.

        Returns
        -------
        tuple[int, int]
            Grid dimensions with ``rows * cols == n`` and the sides as
            close as the divisors of *n* allow.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise LayoutError(f"Grid capacity must be an integer >= 1, got {n!r}")
        short = math.isqrt(n)
        while n % short:
            short -= 1
        long = n // short
        if prefer_columns:
            return short, long
        return long, short

    def update_capacity(self, n: int) -> None:
        """Resize the grid to the smallest grid holding *n* tiles.

        Idempotent: the same *n* always yields the same dimensions.

        Raises
        ------
        LayoutError
            If *n* is not a positive integer.
        """
        rows, cols = self.grid_for(n, self.prefer_columns)
        if (rows, cols) != (self._rows, self._cols):
            logger.debug(
                "Grid resized for %d graphs: %dx%d -> %dx%d",
                n, self._rows, self._cols, rows, cols,
            )
        self._rows, self._cols = rows, cols
        self._capacity = n

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def get_metrics(self, index: int) -> LayoutMetrics:
        """Return the tile for *index* in row-major order.

        Parameters
        ----------
        index : int
            Tile index, ``0 <= index < rows * cols``.

        Returns
        -------
        LayoutMetrics
            Tile origin and size on the unit page.

        Raises
        ------
        LayoutError
            If *index* is outside the grid.
        """
        if not 0 <= index < self.cell_count:
            raise LayoutError(
                f"Tile index {index} outside {self._rows}x{self._cols} grid"
            )
        row, col = divmod(index, self._cols)
        return LayoutMetrics(
            x=col / self._cols,
            y=(self._rows - row - 1) / self._rows,
            width=1.0 / self._cols,
            height=1.0 / self._rows,
        )
