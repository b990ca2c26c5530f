"""Document -- graphs, page setup, and the script compiler.

The compiled script is read by gnuplot line by line, with no lookahead
and no rollback, so every ``set`` must precede the command that depends
on it and ``quit`` must come last::

    <pre-init commands>          verbatim, insertion order
    set <key> <value>            one per document property
    set term <device_type>       only if the terminal names one
    set output '<output_path>'   only if the terminal names one
    <post-init commands>         verbatim, insertion order
    <graph 0 fragment>           single graph: no multiplot wrapper
    quit

With more than one graph the plot section becomes::

    set multiplot [title "<page title>"]
    set origin <x>,<y>           per graph, ascending index,
    set size <width>,<height>    tile from the document layout
    <graph i fragment>
    unset multiplot

Each section is built as a list of lines by a function of the current
state; the lists are joined once.  Compiling has no side effect on the
document, so the same state and terminal always give the same text.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from plotscript.layout.grid import GraphLayout, GridGraphLayout
from plotscript.plot.axis import Axis
from plotscript.plot.graph import Graph
from plotscript.plot.plots import Plot
from plotscript.plot.properties import (
    PropertiesHolder,
    check_single_line,
    format_number,
)
from plotscript.script.terminal import Terminal
from plotscript.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

NL = "\n"


class ScriptError(Exception):
    """Raised when document state cannot be compiled into a script."""

    pass


class Document:
    """Top-level plot description and script compiler.

    A new document holds exactly one empty graph, which is the current
    graph.  Adding a graph makes it current and resizes the layout so
    that ``layout.capacity == len(graphs)`` holds after every change.

    Parameters
    ----------
    layout : GraphLayout | None
        Tile placement for multiplot pages.  ``None`` uses a 1x1
        :class:`GridGraphLayout` that grows with the graph count.
    """

    def __init__(self, layout: GraphLayout | None = None) -> None:
        self._graphs: list[Graph] = [Graph()]
        self._current = 0
        self._page_title = ""
        self._pre_init: list[str] = []
        self._post_init: list[str] = []
        self.properties = PropertiesHolder()
        self._layout: GraphLayout = GridGraphLayout(1, 1)
        if layout is not None:
            self.layout = layout

    def __repr__(self) -> str:
        return (
            f"Document(graphs={len(self._graphs)}, "
            f"current_graph={self._current}, layout={self._layout!r})"
        )

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    @property
    def graphs(self) -> tuple[Graph, ...]:
        return tuple(self._graphs)

    @property
    def current_graph(self) -> int:
        """Index of the most recently added graph."""
        return self._current

    @property
    def plots(self) -> tuple[Plot, ...]:
        """Plots of the current graph."""
        return self._graphs[self._current].plots

    @property
    def layout(self) -> GraphLayout:
        return self._layout

    @layout.setter
    def layout(self, layout: GraphLayout) -> None:
        if not isinstance(layout, GraphLayout):
            raise TypeError(f"Expected a GraphLayout, got {type(layout).__name__}")
        layout.update_capacity(len(self._graphs))
        self._layout = layout

    def _graph_at(self, index: int | None) -> Graph:
        if index is None:
            return self._graphs[self._current]
        if not 0 <= index < len(self._graphs):
            raise IndexError(
                f"Graph index {index} out of range [0, {len(self._graphs)})"
            )
        return self._graphs[index]

    def add_graph(self, graph: Graph) -> int:
        """Append *graph*, make it current, and return its index."""
        if not isinstance(graph, Graph):
            raise TypeError(f"Expected a Graph, got {type(graph).__name__}")
        self._graphs.append(graph)
        self._current = len(self._graphs) - 1
        self._layout.update_capacity(len(self._graphs))
        logger.debug("Added graph %d", self._current)
        return self._current

    def new_graph(self, is_3d: bool = False) -> int:
        """Append an empty graph, make it current, and return its index."""
        return self.add_graph(Graph(is_3d=is_3d))

    def add_plot(self, plot: Plot, graph: int | None = None) -> int:
        """Append *plot* to graph *graph* (default: current graph).

        Returns
        -------
        int
            Index of the graph that received the plot.

        Raises
        ------
        TypeError
            If *plot* is ``None`` or not a :class:`Plot`.
        IndexError
            If *graph* is not a valid graph index.
        """
        target = self._graph_at(graph)
        target.add_plot(plot)
        return self._current if graph is None else graph

    def get_axis(self, name: str, graph: int | None = None) -> Axis:
        """Return axis *name* of graph *graph* (default: current graph)."""
        return self._graph_at(graph).get_axis(name)

    # ------------------------------------------------------------------
    # Page setup
    # ------------------------------------------------------------------

    @property
    def page_title(self) -> str:
        return self._page_title

    @page_title.setter
    def page_title(self, title: str | None) -> None:
        self.set_page_title(title)

    def set_page_title(self, title: str | None) -> None:
        """Set the multiplot page title; ``None`` or ``""`` clears it."""
        title = "" if title is None else str(title)
        check_single_line("Page title", title)
        if '"' in title:
            raise ValueError(f"Page title must not contain '\"', got {title!r}")
        self._page_title = title

    def set(self, key: str, value: str = "") -> None:
        self.properties.set(key, value)

    def unset(self, key: str) -> None:
        self.properties.unset(key)

    @property
    def pre_init(self) -> tuple[str, ...]:
        return tuple(self._pre_init)

    @property
    def post_init(self) -> tuple[str, ...]:
        return tuple(self._post_init)

    def add_pre_init(self, command: str) -> None:
        """Queue a raw command before all generated configuration.

        The text is emitted exactly as given, embedded line breaks included.
        """
        self._pre_init.append(command)

    def add_post_init(self, command: str) -> None:
        """Queue a raw command after configuration, before the plots."""
        self._post_init.append(command)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self, terminal: Terminal | None = None) -> str:
        """Compile the document into a gnuplot script.

        Parameters
        ----------
        terminal : Terminal | None
            Output device.  ``None`` keeps gnuplot's defaults.

        Returns
        -------
        str
            Newline-terminated script ending with ``quit``.

        Raises
        ------
        ScriptError
            If the layout is not sized for the current graph count.
        """
        terminal = terminal if terminal is not None else Terminal()
        lines: list[str] = []
        lines.extend(self._pre_init)
        lines.extend(self.properties.to_lines())
        lines.extend(terminal.to_lines())
        lines.extend(self._post_init)
        lines.extend(self._plot_lines())
        lines.append("quit")
        logger.debug(
            "Compiled %d graph(s) into %d script lines",
            len(self._graphs), len(lines),
        )
        return NL.join(lines) + NL

    def write_script(
        self, path: str | Path, terminal: Terminal | None = None,
    ) -> Path:
        """Compile and write the script atomically to *path*."""
        path = Path(path)
        atomic_write_text(path, self.compile(terminal))
        logger.info("Wrote gnuplot script to %s", path)
        return path

    def _plot_lines(self) -> list[str]:
        lines: list[str] = []
        if len(self._graphs) == 1:
            self._graphs[0].emit(lines)
            return lines

        self._check_layout()
        header = "set multiplot"
        if self._page_title:
            header += f' title "{self._page_title}"'
        lines.append(header)
        for i, graph in enumerate(self._graphs):
            lines.extend(tile_lines(self._layout, i))
            graph.emit(lines)
        lines.append("unset multiplot")
        return lines

    def _check_layout(self) -> None:
        if self._layout.capacity != len(self._graphs):
            raise ScriptError(
                f"Layout sized for {self._layout.capacity} graph(s) but "
                f"document has {len(self._graphs)}"
            )


def tile_lines(layout: GraphLayout, index: int) -> Sequence[str]:
    """Return the ``set origin`` / ``set size`` pair for tile *index*."""
    m = layout.get_metrics(index)
    return (
        f"set origin {format_number(m.x)},{format_number(m.y)}",
        f"set size {format_number(m.width)},{format_number(m.height)}",
    )
