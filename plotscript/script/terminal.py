"""Terminal descriptor -- the gnuplot output device and destination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from plotscript.plot.properties import check_single_line

if TYPE_CHECKING:
    from plotscript.configs.loader import TerminalConfig


@dataclass(frozen=True)
class Terminal:
    """Output device for the compiled script.

    Parameters
    ----------
    device_type : str
        gnuplot terminal, optionally with options (``"pngcairo size
        800,600"``).  Empty keeps gnuplot's default terminal.
    output_path : str
        File the terminal writes to.  Empty keeps gnuplot's default
        output.  Not escaped: a path holding ``'`` breaks the script.
    """

    device_type: str = ""
    output_path: str = ""

    def __post_init__(self) -> None:
        for name in ("device_type", "output_path"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, "")
            else:
                check_single_line(f"Terminal {name}", str(value))
                object.__setattr__(self, name, str(value))

    @classmethod
    def from_config(cls, cfg: TerminalConfig) -> Terminal:
        return cls(device_type=cfg.device_type, output_path=cfg.output_path)

    def to_lines(self) -> list[str]:
        """Return the ``set term`` / ``set output`` commands that apply."""
        lines = []
        if self.device_type:
            lines.append(f"set term {self.device_type}")
        if self.output_path:
            lines.append(f"set output '{self.output_path}'")
        return lines
