"""
Script compilation module.

Turns a :class:`Document` (graphs, page setup, hook commands) into the
line-oriented command script read by gnuplot.
"""

from plotscript.script.document import Document, ScriptError
from plotscript.script.terminal import Terminal

__all__ = ["Document", "ScriptError", "Terminal"]
