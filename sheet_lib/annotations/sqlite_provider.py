"""SQLite-backed annotation provider.

Reads precomputed pinyin and stroke data from an external character
database. The schema is owned by whatever tool fills the database; this
module only needs the ``annotations`` table described in SCHEMA.

Example usage:
    Reading annotations::

        from sheet_lib.annotations import SqliteAnnotationProvider

        provider = SqliteAnnotationProvider('/data/hanzi.db')
        annotation = provider.get_annotation('永')

    For testing with an in-memory database::

        conn = sqlite3.connect(':memory:')
        provider = SqliteAnnotationProvider(':memory:', connection_factory=lambda: conn)
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Optional

from ..errors import AnnotationLookupError
from .provider import Annotation

_logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS annotations (
    character TEXT PRIMARY KEY,
    pinyin_with_tone TEXT,
    pinyin_without_tone TEXT,
    all_pinyins TEXT,
    stroke_names TEXT,
    stroke_count INTEGER
);
"""


class SqliteAnnotationProvider:
    """Provider that looks characters up in an SQLite database.

    A row with invalid JSON is logged and reported as ``None``. Database
    errors raise AnnotationLookupError, so a caching caller can tell a
    failed lookup from an absent character.

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: str, connection_factory=None, close_connections: bool | None = None):
        """Initialize the provider.

        Args:
            db_path: Path to the SQLite database file.
            connection_factory: Optional callable returning a connection,
                useful for tests with an in-memory database.
            close_connections: Close each connection after use. Defaults to
                True without a factory and False with one, since a factory
                usually hands out a shared connection.
        """
        self.db_path = db_path
        self._connection_factory = connection_factory
        if close_connections is None:
            close_connections = connection_factory is None
        self._close_connections = close_connections

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection_factory:
            return self._connection_factory()
        return sqlite3.connect(self.db_path)

    def _release(self, conn) -> None:
        if conn is not None and self._close_connections:
            conn.close()

    def ensure_schema(self) -> None:
        """Create the annotations table if it does not exist."""
        conn = self._get_connection()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            self._release(conn)

    def get_annotation(self, character: str) -> Optional[Annotation]:
        """Look up one character.

        Returns:
            Annotation, or None if the character is not in the database or
            its row holds invalid JSON.

        Raises:
            AnnotationLookupError: If the database cannot be read.
        """
        conn = None
        try:
            conn = self._get_connection()
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM annotations WHERE character = ?",
                (character,)
            ).fetchone()
            if row is None:
                return None
            all_pinyins = tuple(json.loads(row['all_pinyins'] or '[]'))
            stroke_names = tuple(json.loads(row['stroke_names'] or '[]'))
            return Annotation(
                character=row['character'],
                pinyin_with_tone=row['pinyin_with_tone'] or '',
                pinyin_without_tone=row['pinyin_without_tone'] or '',
                is_polyphone=len(all_pinyins) > 1,
                stroke_order_names=stroke_names,
                all_pinyins=all_pinyins,
                stroke_count=row['stroke_count'] if row['stroke_count'] is not None else len(stroke_names),
            )
        except sqlite3.Error as e:
            _logger.warning("Database error getting annotation for %r: %s", character, e)
            raise AnnotationLookupError(f"Database error for {character!r}: {e}") from e
        except json.JSONDecodeError as e:
            _logger.warning("Invalid JSON in annotation row for %r: %s", character, e)
            return None
        finally:
            self._release(conn)

    def save_annotation(self, annotation: Annotation) -> bool:
        """Insert or replace one annotation row.

        Returns:
            True on success, False if a database error occurred.
        """
        conn = None
        try:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT OR REPLACE INTO annotations
                    (character, pinyin_with_tone, pinyin_without_tone,
                     all_pinyins, stroke_names, stroke_count)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    annotation.character,
                    annotation.pinyin_with_tone,
                    annotation.pinyin_without_tone,
                    json.dumps(list(annotation.all_pinyins), ensure_ascii=False),
                    json.dumps(list(annotation.stroke_order_names), ensure_ascii=False),
                    annotation.stroke_count,
                )
            )
            conn.commit()
            return True
        except sqlite3.Error as e:
            _logger.warning("Database error saving annotation for %r: %s", annotation.character, e)
            return False
        finally:
            self._release(conn)
