"""Per-axis configuration.

An :class:`Axis` is a :class:`PropertiesHolder` whose convenience setters
know the gnuplot property names for one axis, e.g. for ``"y"``::

    set ylabel "Temperature"
    set yrange [0:100]
    set logscale y
"""

from __future__ import annotations

from plotscript.plot.properties import (
    PropertiesHolder,
    check_single_line,
    format_number,
)


class Axis(PropertiesHolder):
    """Configuration of one named axis (``x``, ``y``, ``z``, ``x2``, ...)."""

    def __init__(self, name: str) -> None:
        super().__init__()
        if not isinstance(name, str) or not name or " " in name:
            raise ValueError(f"Axis name must be a non-empty word, got {name!r}")
        check_single_line("Axis name", name)
        self._name = name

    def __repr__(self) -> str:
        return f"Axis({self._name!r}, properties={len(self)})"

    @property
    def name(self) -> str:
        return self._name

    def set_label(self, text: str) -> None:
        if '"' in text:
            raise ValueError(f"Axis label must not contain '\"', got {text!r}")
        self.set(f"{self._name}label", f'"{text}"')

    def set_boundaries(self, lo: float | None, hi: float | None) -> None:
        """Set the axis range; ``None`` leaves that end autoscaled."""
        lo_s = "" if lo is None else format_number(lo)
        hi_s = "" if hi is None else format_number(hi)
        self.set(f"{self._name}range", f"[{lo_s}:{hi_s}]")

    def set_log_scale(self, enabled: bool = True) -> None:
        key = f"logscale {self._name}"
        if enabled:
            self.set(key)
        else:
            self.unset(key)

    def set_tics(self, spec: str) -> None:
        self.set(f"{self._name}tics", spec)
