"""Quote-aware splitting of shell-like option strings."""

from typing import List, Optional

_WHITESPACE = " "
_QUOTES = ('"', "'")
_SEPARATORS = frozenset(" \t\n\x0b\f\r")


def tokenize(raw: Optional[str]) -> List[str]:
    """Split ``raw`` on whitespace, keeping quoted spans together.

    Quote characters stay in the emitted token, so ``a "b c"`` yields
    ``['a', '"b c"']``. An unterminated quote runs to the end of the input.
    Empty or all-whitespace input yields an empty list.
    """
    tokens: List[str] = []
    current: List[str] = []
    expected_separator = _WHITESPACE

    for char in (raw or "").strip("".join(_SEPARATORS)):
        if expected_separator == _WHITESPACE:
            if char in _SEPARATORS:
                if current:
                    tokens.append("".join(current))
                    current = []
                continue
            if char in _QUOTES:
                expected_separator = char
        elif char == expected_separator:
            expected_separator = _WHITESPACE
        current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens
