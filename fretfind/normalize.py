"""Normalization of chord names typed by the user.

Normalization runs on every keystroke before the text reaches the chord
parser, so it accepts any string and applying it twice changes nothing.
"""

from __future__ import annotations

import re

_ROOT_LETTERS = frozenset("abcdefg")
_MAJ_PATTERN = re.compile("maj", re.IGNORECASE)


def normalize_chord_name(text: str) -> str:
    """Normalize free-form chord text to the parser's expected casing.

    Rules, in order:

    1. A leading root letter a-g is uppercased ("cmaj7" -> "Cmaj7").
    2. A bass letter a-g right after a slash is uppercased ("C/g" -> "C/G").
    3. Any casing of "maj" becomes "maj" ("CMAJ7" -> "Cmaj7").

    Args:
        text: Raw chord text, possibly empty or partial.

    Returns:
        The normalized text.
    """
    chars = list(text)
    if chars and chars[0] in _ROOT_LETTERS:
        chars[0] = chars[0].upper()
    for i in range(1, len(chars)):
        if chars[i - 1] == "/" and chars[i] in _ROOT_LETTERS:
            chars[i] = chars[i].upper()
    return _MAJ_PATTERN.sub("maj", "".join(chars))
