"""Graph -- one plot area of a page.

A graph owns an ordered list of plots and a map of named axes.  Its
script fragment is::

    set xlabel "t"            <- axis properties, axes in creation order
    set yrange [0:1]
    plot sin(x), '-' with points
    0.0 1.0                   <- inline data, plots in insertion order
    e
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from plotscript.plot.axis import Axis
from plotscript.plot.plots import Plot

logger = logging.getLogger(__name__)


class Graph:
    """Ordered plots plus named axis configuration.

    Parameters
    ----------
    is_3d : bool
        Emit ``splot`` instead of ``plot``.
    """

    def __init__(self, is_3d: bool = False) -> None:
        self.is_3d = is_3d
        self._plots: list[Plot] = []
        self._axes: dict[str, Axis] = {}

    def __len__(self) -> int:
        return len(self._plots)

    def __repr__(self) -> str:
        return (
            f"Graph(plots={len(self._plots)}, axes={list(self._axes)}, "
            f"is_3d={self.is_3d})"
        )

    @property
    def plots(self) -> tuple[Plot, ...]:
        return tuple(self._plots)

    @property
    def axes(self) -> Mapping[str, Axis]:
        return MappingProxyType(self._axes)

    def add_plot(self, plot: Plot) -> None:
        """Append *plot*; order is kept verbatim in the output."""
        if not isinstance(plot, Plot):
            raise TypeError(f"Expected a Plot, got {type(plot).__name__}")
        self._plots.append(plot)

    def get_axis(self, name: str) -> Axis:
        """Return axis *name*, creating an empty one on first access."""
        axis = self._axes.get(name)
        if axis is None:
            axis = Axis(name)
            self._axes[name] = axis
        return axis

    def set_axis(self, name: str, axis: Axis) -> None:
        """Replace axis *name*; the axis must carry the same name."""
        if not isinstance(axis, Axis):
            raise TypeError(f"Expected an Axis, got {type(axis).__name__}")
        if axis.name != name:
            raise ValueError(
                f"Axis {axis.name!r} cannot be stored under name {name!r}"
            )
        self._axes[name] = axis

    def plot_command(self) -> str | None:
        """Return the ``plot``/``splot`` line, or ``None`` without plots."""
        if not self._plots:
            return None
        verb = "splot" if self.is_3d else "plot"
        return f"{verb} " + ", ".join(p.definition() for p in self._plots)

    def emit(self, lines: list[str]) -> None:
        """Append this graph's script fragment to *lines*."""
        for axis in self._axes.values():
            lines.extend(axis.to_lines())
        command = self.plot_command()
        if command is None:
            logger.debug("Graph has no plots; emitting axis settings only")
            return
        lines.append(command)
        for plot in self._plots:
            plot.emit(lines)
