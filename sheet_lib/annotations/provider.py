"""Annotation provider interface and in-memory implementations.

Pinyin and stroke-order data come from an external character database.
The layout engine never computes or fetches that data; it only calls a
provider with ``get_annotation(character)`` and treats ``None`` as "no
data". Caching belongs to the caller, through an explicit AnnotationCache
object rather than module-level state.

Example usage:
    Wrapping a provider in a caller-owned cache::

        from sheet_lib.annotations import AnnotationCache, MappingAnnotationProvider

        provider = MappingAnnotationProvider.from_json('annotations.json')
        cache = AnnotationCache(provider)
        cache.get_annotation('永').pinyin_with_tone   # 'yǒng'
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Tuple

from ..domain.cells import BLANK_CHARACTERS, PracticeCell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Annotation:
    """Precomputed linguistic data for one character."""
    character: str
    pinyin_with_tone: str = ''
    pinyin_without_tone: str = ''
    is_polyphone: bool = False
    stroke_order_names: Tuple[str, ...] = ()
    all_pinyins: Tuple[str, ...] = ()
    stroke_count: int = 0

    def to_dict(self) -> dict:
        return {
            'character': self.character,
            'pinyin_with_tone': self.pinyin_with_tone,
            'pinyin_without_tone': self.pinyin_without_tone,
            'is_polyphone': self.is_polyphone,
            'stroke_order_names': list(self.stroke_order_names),
            'all_pinyins': list(self.all_pinyins),
            'stroke_count': self.stroke_count,
        }

    @classmethod
    def from_dict(cls, character: str, d: dict) -> Annotation:
        """Create from a snake_case or camelCase dictionary."""
        def pick(*keys, default=None):
            for k in keys:
                if k in d and d[k] is not None:
                    return d[k]
            return default

        all_pinyins = tuple(pick('all_pinyins', 'allPinyins', default=()) or ())
        with_tone = str(pick('pinyin_with_tone', 'pinyinWithTone', 'pinyin', default=''))
        if not all_pinyins and with_tone:
            all_pinyins = (with_tone,)
        strokes = tuple(pick('stroke_order_names', 'strokeOrderNames', 'strokeNames', default=()) or ())
        return cls(
            character=character,
            pinyin_with_tone=with_tone,
            pinyin_without_tone=str(pick('pinyin_without_tone', 'pinyinWithoutTone', default='')),
            is_polyphone=bool(pick('is_polyphone', 'isPolyphone', default=len(all_pinyins) > 1)),
            stroke_order_names=strokes,
            all_pinyins=all_pinyins,
            stroke_count=int(pick('stroke_count', 'strokeCount', default=len(strokes))),
        )


class AnnotationProvider(Protocol):
    """Synchronous lookup of annotation data for one character."""

    def get_annotation(self, character: str) -> Optional[Annotation]:
        ...


class MappingAnnotationProvider:
    """Provider backed by an in-memory dictionary.

    Attributes:
        _data: Mapping of character -> Annotation.
    """

    def __init__(self, annotations: Iterable[Annotation] = ()):
        self._data: Dict[str, Annotation] = {a.character: a for a in annotations}

    def get_annotation(self, character: str) -> Optional[Annotation]:
        return self._data.get(character)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, character: str) -> bool:
        return character in self._data

    @classmethod
    def from_dict(cls, data: Dict[str, dict]) -> MappingAnnotationProvider:
        """Create from ``{character: {pinyinWithTone: ..., ...}}``."""
        return cls(Annotation.from_dict(ch, fields) for ch, fields in data.items())

    @classmethod
    def from_json(cls, path: str | Path) -> MappingAnnotationProvider:
        """Load a ``{character: {...}}`` JSON file."""
        with open(path, encoding='utf-8') as fh:
            return cls.from_dict(json.load(fh))


_MISSING = object()


@dataclass
class AnnotationCache:
    """Memoizing wrapper around a provider, owned by the caller.

    Misses are cached too, so an absent character is looked up once.
    Failed lookups are not cached; the next request asks the provider
    again.

    Attributes:
        provider: Underlying provider.
        hits: Number of lookups served from the cache.
        misses: Number of lookups forwarded to the provider.
        failures: Number of forwarded lookups that raised.
    """
    provider: AnnotationProvider
    hits: int = 0
    misses: int = 0
    failures: int = 0
    _entries: Dict[str, object] = field(default_factory=dict, repr=False)

    def get_annotation(self, character: str) -> Optional[Annotation]:
        cached = self._entries.get(character, _MISSING)
        if cached is not _MISSING:
            self.hits += 1
            return cached  # type: ignore[return-value]
        self.misses += 1
        try:
            value = _lookup(self.provider, character)
        except Exception as e:
            self.failures += 1
            logger.warning("Annotation lookup failed for %r, not cached: %s", character, e)
            return None
        self._entries[character] = value
        return value

    def __len__(self) -> int:
        return len(self._entries)

    def invalidate(self, characters: Iterable[str]) -> None:
        """Forget cached entries for the given characters."""
        for ch in characters:
            self._entries.pop(ch, None)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        self.failures = 0


def _lookup(provider: AnnotationProvider | None, character: str) -> Optional[Annotation]:
    if provider is None or not character or character in BLANK_CHARACTERS:
        return None
    return provider.get_annotation(character)


def safe_lookup(provider: AnnotationProvider | None, character: str) -> Optional[Annotation]:
    """Look up a character, treating blanks and provider failures as absent.

    Provider exceptions are logged and swallowed here so that a broken
    lookup can never abort pagination; the display field is left empty.
    """
    try:
        return _lookup(provider, character)
    except Exception as e:
        logger.warning("Annotation lookup failed for %r: %s", character, e)
        return None


def pinyin_for(character: str, provider: AnnotationProvider | None, with_tone: bool = True) -> str:
    """Pinyin to print above a character, or '' when unavailable."""
    annotation = safe_lookup(provider, character)
    if annotation is None:
        return ''
    return annotation.pinyin_with_tone if with_tone else annotation.pinyin_without_tone


def annotate(cell: PracticeCell, provider: AnnotationProvider | None) -> Optional[Annotation]:
    """Annotation for a practice cell, or None."""
    return safe_lookup(provider, cell.character)
