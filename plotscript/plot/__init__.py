"""
Plot model module.

Graphs, their plots (data series) and named axes, plus the ordered
``set`` property store they share with the document.
"""

from plotscript.plot.axis import Axis
from plotscript.plot.graph import Graph
from plotscript.plot.plots import DataSetPlot, FunctionPlot, Plot
from plotscript.plot.properties import PropertiesHolder, format_number

__all__ = [
    "Axis",
    "DataSetPlot",
    "FunctionPlot",
    "Graph",
    "Plot",
    "PropertiesHolder",
    "format_number",
]
