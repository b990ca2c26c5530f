"""Build a :class:`Document` from a YAML description.

Schema (every key optional)::

    title: "Run 42"                 # multiplot page title
    set:                            # document properties, in order
      grid: ""
      key: "left top"
    pre_init: ["reset"]
    post_init: ["set style fill solid"]
    graphs:
      - splot: false
        axes:
          x: {label: "time", range: [0, 10], log: false, tics: "2"}
        plots:
          - function: "sin(x)"
            title: "sine"
            style: lines
          - data: [[0, 1.0], [1, 2.5]]
            style: points

The first entry of ``graphs`` fills the document's initial graph; each
further entry adds a graph, so graph order follows the file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from plotscript.configs.loader import ConfigError, LayoutConfig, _as_bool
from plotscript.layout.grid import GridGraphLayout
from plotscript.plot.graph import Graph
from plotscript.plot.plots import DataSetPlot, FunctionPlot, Plot
from plotscript.script.document import Document
from plotscript.utils.fs import load_yaml

logger = logging.getLogger(__name__)


def _parse_plot(where: str, data: Any) -> Plot:
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be a mapping, got {data!r}")
    if ("function" in data) == ("data" in data):
        raise ConfigError(f"{where} needs exactly one of 'function' or 'data'")
    title = data.get("title")
    style = data.get("style")
    if "function" in data:
        return FunctionPlot(
            expression=str(data["function"]),
            title=None if title is None else str(title),
            style=None if style is None else str(style),
        )
    return DataSetPlot(
        data=data["data"],
        title=None if title is None else str(title),
        style=None if style is None else str(style),
    )


def _parse_range(where: str, raw: Any) -> tuple[float | None, float | None]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ConfigError(f"{where} must be a 2-element list, got {raw!r}")
    lo, hi = raw
    return (
        None if lo is None else float(lo),
        None if hi is None else float(hi),
    )


def _fill_graph(graph: Graph, index: int, data: Any) -> None:
    where = f"graphs[{index}]"
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be a mapping, got {data!r}")
    graph.is_3d = _as_bool(f"{where}.splot", data.get("splot", False))

    for name, axis_data in (data.get("axes") or {}).items():
        if not isinstance(axis_data, dict):
            raise ConfigError(f"{where}.axes.{name} must be a mapping")
        axis = graph.get_axis(str(name))
        if "label" in axis_data:
            axis.set_label(str(axis_data["label"]))
        if "range" in axis_data:
            axis.set_boundaries(
                *_parse_range(f"{where}.axes.{name}.range", axis_data["range"])
            )
        if "log" in axis_data:
            axis.set_log_scale(
                _as_bool(f"{where}.axes.{name}.log", axis_data["log"])
            )
        if "tics" in axis_data:
            axis.set_tics(str(axis_data["tics"]))

    for j, plot_data in enumerate(data.get("plots") or []):
        graph.add_plot(_parse_plot(f"{where}.plots[{j}]", plot_data))


def document_from_dict(
    data: dict[str, Any], layout: LayoutConfig | None = None,
) -> Document:
    """Build a :class:`Document` from a parsed description.

    Parameters
    ----------
    data : dict
        Parsed YAML mapping (see module docstring).
    layout : LayoutConfig | None
        Grid preferences; ``None`` uses the defaults.

    Raises
    ------
    ConfigError
        If the description is malformed.
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Document description must be a mapping, got {type(data).__name__}"
        )
    layout = layout if layout is not None else LayoutConfig()
    doc = Document(GridGraphLayout(prefer_columns=layout.prefer_columns))

    try:
        doc.set_page_title(data.get("title"))
        for key, value in (data.get("set") or {}).items():
            doc.set(str(key), "" if value is None else str(value))
        for command in data.get("pre_init") or []:
            doc.add_pre_init(str(command))
        for command in data.get("post_init") or []:
            doc.add_post_init(str(command))

        for i, graph_data in enumerate(data.get("graphs") or []):
            if i == 0:
                graph = doc.graphs[0]
            else:
                graph = Graph()
                doc.add_graph(graph)
            _fill_graph(graph, i, graph_data)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid document description: {exc}") from exc

    logger.debug("Built document with %d graph(s)", len(doc.graphs))
    return doc


def load_document(
    path: str | Path, layout: LayoutConfig | None = None,
) -> Document:
    """Load a document description from a YAML file.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ConfigError
        If the file is empty or malformed.
    """
    path = Path(path)
    logger.info("Loading document from %s", path)
    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty document file: {path}")
    return document_from_dict(data, layout)
