"""Splitting raw input text into practice units."""

from __future__ import annotations

from typing import List

import regex

# Extended grapheme clusters, so a base character with combining marks or a
# variation selector stays one practice unit.
_GRAPHEME_RE = regex.compile(r'\X')
_LINE_BREAKS = frozenset({'\n', '\r', '\r\n', '\u2028', '\u2029'})


def split_characters(text: str | None) -> List[str]:
    """Split text into grapheme clusters, one per practice unit.

    Spaces and punctuation are kept; line breaks are dropped because they
    only separate lines in the input box and are not written on the sheet.

    Args:
        text: Raw input text. None is treated as empty.

    Returns:
        List of grapheme cluster strings in input order.

    Example:
        >>> split_characters('永和\\n九年')
        ['永', '和', '九', '年']
    """
    if not text:
        return []
    return [g for g in _GRAPHEME_RE.findall(text) if g not in _LINE_BREAKS]
