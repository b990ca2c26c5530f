"""Ordered ``set`` property store.

gnuplot is configured through ``set <key> <value>`` statements that take
effect in the order they are read.  :class:`PropertiesHolder` keeps those
pairs in insertion order; replacing a key keeps its original position so
the emitted script stays stable while a document is edited.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator


def format_number(value: float) -> str:
    """Format a number for a gnuplot command, independent of locale.

    Integers keep their integer form; everything else uses the shortest
    round-tripping float repr (``.`` decimal point, no grouping).
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not plottable numbers")
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return repr(float(value))


def check_single_line(what: str, text: str) -> str:
    """Reject text that would split one command across lines."""
    if "\n" in text or "\r" in text:
        raise ValueError(f"{what} must be a single line, got {text!r}")
    return text


class PropertiesHolder:
    """Insertion-ordered ``key -> value`` store of ``set`` statements."""

    def __init__(self) -> None:
        self._props: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._props)

    def __contains__(self, key: object) -> bool:
        return key in self._props

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def set(self, key: str, value: str = "") -> None:
        """Set *key* to *value*; an empty value emits a bare ``set <key>``."""
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"Property key must be a non-empty string, got {key!r}")
        check_single_line("Property key", key)
        value = "" if value is None else str(value)
        check_single_line(f"Value of property {key!r}", value)
        self._props[key] = value

    def unset(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""
        self._props.pop(key, None)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._props.get(key, default)

    def items(self) -> list[tuple[str, str]]:
        return list(self._props.items())

    def clear(self) -> None:
        self._props.clear()

    def to_lines(self) -> list[str]:
        """Return one ``set`` command per property, in insertion order."""
        return [
            f"set {key} {value}" if value else f"set {key}"
            for key, value in self._props.items()
        ]
