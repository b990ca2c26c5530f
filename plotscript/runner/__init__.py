"""
gnuplot runner module.

Delivers compiled scripts to the gnuplot process and maps its exit
status and error stream to exceptions.
"""

from plotscript.runner.gnuplot_runner import (
    GNUPlotError,
    GNUPlotExecutionError,
    GNUPlotNotFound,
    GNUPlotRunner,
    GNUPlotTimeout,
    RunResult,
)

__all__ = [
    "GNUPlotError",
    "GNUPlotExecutionError",
    "GNUPlotNotFound",
    "GNUPlotRunner",
    "GNUPlotTimeout",
    "RunResult",
]
