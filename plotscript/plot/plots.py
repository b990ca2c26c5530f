"""Plot entries -- the data series drawn inside one graph.

Every plot is an immutable, slotted dataclass.  A plot contributes two
things to the script:

* its **definition**, one clause of the graph's ``plot`` command
  (``sin(x) title "sine" with lines``);
* its **inline data**, lines that follow the ``plot`` command when the
  definition reads from ``'-'``, terminated by a line holding ``e``.

Definitions of all plots in a graph are joined with ``", "`` into a
single ``plot`` command, then each plot's inline data follows in the
same order, which is the order gnuplot consumes ``'-'`` sources in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from plotscript.plot.properties import check_single_line, format_number

INLINE_SOURCE = "'-'"
"""Data-source token for data that follows the ``plot`` command."""

END_OF_DATA = "e"


def _decorate(clause: str, title: str | None, style: str | None) -> str:
    parts = [clause]
    if title is not None:
        parts.append(f'title "{title}"')
    if style:
        parts.append(f"with {style}")
    return " ".join(parts)


def _check_title_style(title: str | None, style: str | None) -> None:
    if title is not None:
        check_single_line("Plot title", title)
        if '"' in title:
            raise ValueError(f"Plot title must not contain '\"', got {title!r}")
    if style is not None:
        check_single_line("Plot style", style)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Plot(ABC):
    """Base class for all plot entries."""

    @abstractmethod
    def definition(self) -> str:
        """Clause for this plot inside the ``plot`` command."""

    def data_lines(self) -> list[str]:
        """Inline data lines; empty for plots without a ``'-'`` source."""
        return []

    def emit(self, lines: list[str]) -> None:
        """Append this plot's inline data to *lines*."""
        lines.extend(self.data_lines())


# ---------------------------------------------------------------------------
# Concrete plots
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FunctionPlot(Plot):
    """A function expression evaluated by gnuplot.

    Parameters
    ----------
    expression : str
        gnuplot expression, e.g. ``"sin(x)"``.
    title : str | None
        Legend entry.  ``None`` keeps gnuplot's default.
    style : str | None
        Drawing style, e.g. ``"lines"``.
    """

    expression: str
    title: str | None = None
    style: str | None = None

    def __post_init__(self) -> None:
        if not self.expression or not self.expression.strip():
            raise ValueError("FunctionPlot requires a non-empty expression")
        check_single_line("Function expression", self.expression)
        _check_title_style(self.title, self.style)

    def definition(self) -> str:
        return _decorate(self.expression, self.title, self.style)


@dataclass(frozen=True, slots=True)
class DataSetPlot(Plot):
    """A table of numbers sent inline after the ``plot`` command.

    Parameters
    ----------
    data : array-like
        2-D table, one row per point.  A 1-D sequence is treated as a
        single column.  Converted to a tuple of float tuples.
    title : str | None
        Legend entry.
    style : str | None
        Drawing style, e.g. ``"points"``.
    """

    data: tuple[tuple[float, ...], ...]
    title: str | None = None
    style: str | None = None

    def __post_init__(self) -> None:
        try:
            arr = np.asarray(self.data, dtype=float)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"DataSetPlot data is not numeric: {exc}") from exc
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ValueError(
                f"DataSetPlot data must be 2-D, got {arr.ndim} dimensions"
            )
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(
                f"DataSetPlot requires >= 1 row and column, got shape {arr.shape}"
            )
        _check_title_style(self.title, self.style)
        object.__setattr__(
            self, "data", tuple(tuple(row) for row in arr.tolist()),
        )

    @property
    def columns(self) -> int:
        return len(self.data[0])

    def definition(self) -> str:
        return _decorate(INLINE_SOURCE, self.title, self.style)

    def data_lines(self) -> list[str]:
        rows = [" ".join(format_number(v) for v in row) for row in self.data]
        rows.append(END_OF_DATA)
        return rows
