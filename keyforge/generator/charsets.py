"""
Character Class Registry
=========================

The four character classes secrets are built from, in their canonical
order (upper, lower, numbers, symbols), plus the filter that strips
visually ambiguous characters.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from keyforge.core.models import CharacterClassName

AMBIGUOUS_CHARACTERS: frozenset[str] = frozenset("O0l1")

DEFAULT_SYMBOLS = "!@#$%^&*()_+[]{}|;:,.<>?/~-=\\"

_ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)


def filter_ambiguous(chars: str) -> str:
    """Remove ``O``, ``0``, ``l`` and ``1`` from *chars*, keeping order."""
    return "".join(ch for ch in chars if ch not in AMBIGUOUS_CHARACTERS)


def _dedupe(chars: str) -> str:
    return "".join(dict.fromkeys(chars))


@dataclass(frozen=True, slots=True)
class CharacterClass:
    """An immutable, named, ordered set of characters."""

    name: CharacterClassName
    chars: str

    def without_ambiguous(self) -> CharacterClass:
        return CharacterClass(self.name, filter_ambiguous(self.chars))

    def __len__(self) -> int:
        return len(self.chars)


class CharacterClassRegistry:
    """Lookup of the character classes used by the planner.

    Args:
        symbols: Replacement for the built-in symbol set. Duplicates are
            dropped.

    Raises:
        ValueError: If *symbols* is empty or shares characters with the
            letter or digit classes.
    """

    def __init__(self, symbols: str | None = None) -> None:
        if symbols is None:
            symbol_chars = DEFAULT_SYMBOLS
        else:
            symbol_chars = _dedupe(symbols)
            if not symbol_chars:
                raise ValueError("symbol set must not be empty")
            overlap = [ch for ch in symbol_chars if ch in _ALPHANUMERIC]
            if overlap:
                raise ValueError(
                    "symbol set must not contain letters or digits: "
                    + "".join(overlap)
                )
        self._classes: dict[CharacterClassName, CharacterClass] = {
            CharacterClassName.UPPER: CharacterClass(
                CharacterClassName.UPPER, string.ascii_uppercase
            ),
            CharacterClassName.LOWER: CharacterClass(
                CharacterClassName.LOWER, string.ascii_lowercase
            ),
            CharacterClassName.NUMBERS: CharacterClass(
                CharacterClassName.NUMBERS, string.digits
            ),
            CharacterClassName.SYMBOLS: CharacterClass(
                CharacterClassName.SYMBOLS, symbol_chars
            ),
        }

    def get(self, name: CharacterClassName) -> CharacterClass:
        return self._classes[name]

    def classes(self) -> tuple[CharacterClass, ...]:
        """All classes in canonical order."""
        return tuple(self._classes[name] for name in CharacterClassName)

    def pool(self, name: CharacterClassName, *, avoid_ambiguous: bool = False) -> str:
        """Characters of class *name*, optionally with ambiguous ones removed."""
        cls = self._classes[name]
        return cls.without_ambiguous().chars if avoid_ambiguous else cls.chars
