"""Adapters for the external pinyin / stroke-order provider.

The module exports:
    Annotation: Precomputed data for one character.
    AnnotationProvider: Protocol with get_annotation(character).
    MappingAnnotationProvider: In-memory provider (dict or JSON file).
    SqliteAnnotationProvider: Provider reading an SQLite database.
    AnnotationCache: Caller-owned memoizing wrapper.
    annotate, pinyin_for, safe_lookup: Lookup helpers tolerant of absence.
"""

from .provider import (
    Annotation,
    AnnotationCache,
    AnnotationProvider,
    MappingAnnotationProvider,
    annotate,
    pinyin_for,
    safe_lookup,
)
from .sqlite_provider import SqliteAnnotationProvider

__all__ = [
    'Annotation', 'AnnotationProvider', 'MappingAnnotationProvider',
    'SqliteAnnotationProvider', 'AnnotationCache',
    'annotate', 'pinyin_for', 'safe_lookup',
]
