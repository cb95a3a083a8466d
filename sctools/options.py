"""Minimal command-line option matcher.

Short options look like ``-k``, ``-k=value`` or ``-kvalue`` only when the
letter is followed by ``=``, a space or the end of the argument. Long
options look like ``--name`` or ``--name=value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

__all__ = ["OptionItem", "OptionParser", "UNKNOWN"]

UNKNOWN = "?"


@dataclass(frozen=True)
class OptionItem:
    """An option known by a single letter and, optionally, a long name."""

    letter: str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.letter) != 1:
            raise ValueError(f"option letter must be one character, got {self.letter!r}")


class OptionParser:
    """Matches command-line arguments against a list of options."""

    def __init__(self, options: Iterable[OptionItem]) -> None:
        self.options: Sequence[OptionItem] = tuple(options)

    @staticmethod
    def _value(rest: str) -> str:
        return rest[1:] if rest.startswith("=") else rest

    def at(self, arg: str) -> Tuple[str, Optional[str]]:
        """Return ``(letter, value)`` for one argument.

        ``value`` is the text after ``=`` (or ``""`` when there is none).
        For an unrecognised argument the result is ``("?", None)``.
        """
        if not arg.startswith("-"):
            return UNKNOWN, None

        if not arg.startswith("--"):
            body = arg[1:]
            if not body:
                return UNKNOWN, None
            rest = body[1:]
            if rest[:1] not in ("=", " ", ""):
                return UNKNOWN, None
            for option in self.options:
                if option.letter == body[0]:
                    return option.letter, self._value(rest)
            return UNKNOWN, None

        name, sep, value = arg[2:].partition("=")
        for option in self.options:
            if option.name is not None and option.name == name:
                return option.letter, value if sep else ""
        return UNKNOWN, None

    def parse(self, argv: Iterable[str]) -> Iterator[Tuple[str, Optional[str]]]:
        """Yield ``(letter, value)`` for every argument in ``argv``."""
        for arg in argv:
            yield self.at(arg)