"""
plotscript -- gnuplot script compiler.

Describe a page of graphs (plots, axes, multiplot layout) as a
:class:`Document` and compile it into the line-oriented command script
that gnuplot reads.

Subpackages:
    layout: Multiplot tile placement (grid layout)
    plot: Graphs, plots, axes, and the ``set`` property store
    script: Document model, terminal descriptor, and the compiler
    runner: Delivers compiled scripts to the gnuplot process
    configs: Runtime configuration and YAML document descriptions
"""

from plotscript.layout import GraphLayout, GridGraphLayout, LayoutError, LayoutMetrics
from plotscript.plot import Axis, DataSetPlot, FunctionPlot, Graph, Plot, PropertiesHolder
from plotscript.script import Document, ScriptError, Terminal

__version__ = "0.1.0"

__all__ = [
    "Axis",
    "DataSetPlot",
    "Document",
    "FunctionPlot",
    "Graph",
    "GraphLayout",
    "GridGraphLayout",
    "LayoutError",
    "LayoutMetrics",
    "Plot",
    "PropertiesHolder",
    "ScriptError",
    "Terminal",
]
