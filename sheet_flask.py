"""Flask application setup and shared helpers for the Sheet Editor.

This module serves as the central configuration hub for the Sheet Editor
Flask application. It provides:

    - The Flask application instance shared across all route modules
    - Logging configuration
    - Global constants for request limits and the annotation database
    - Common validation helpers that return ready-made error responses

The Sheet Editor is a small web front for sheet_lib: it lays out practice
sheets and serves guide previews. This module is imported by the main
entry point (sheet_editor.py) and by the route handler module.

Architecture:
    - sheet_flask.py: App instance, config, and utilities (this module)
    - sheet_editor.py: Main entry point that registers routes
    - sheet_routes.py: Sheet, guide and capacity routes

Example:
    Import the Flask app and a validation helper::

        from sheet_flask import app, parse_settings_or_error

        @app.route('/my-route', methods=['POST'])
        def my_handler():
            settings, err = parse_settings_or_error(request.get_json())
            if err:
                return err
            return jsonify(settings.to_dict())

Attributes:
    BASE_DIR (str): Absolute path to the directory containing this module.
    ANNOTATION_DB_PATH (str): Path to the SQLite annotation database.
        Overridable with the SHEET_ANNOTATION_DB environment variable.
    MAX_TEXT_LENGTH (int): Maximum number of characters accepted per sheet.
    MAX_REPEAT_COUNT (int): Largest repeat count accepted in settings.
    MAX_SHEET_CELLS (int): Largest number of cells (characters times
        repeats) one sheet request may lay out.
    MAX_GUIDE_SIZE (float): Largest guide size accepted by preview routes.
    MAX_PREVIEW_SIDE (int): Largest PNG preview side in pixels
        (guide size times scale).
    DEFAULT_PREVIEW_SCALE (float): Pixels per unit for PNG guide previews.
    app (Flask): The Flask application instance.
"""

import logging
import os

from flask import Flask, jsonify

from sheet_lib.annotations import AnnotationCache, SqliteAnnotationProvider
from sheet_lib.domain.settings import LayoutSettings
from sheet_lib.errors import SheetError
from sheet_lib.layout.text import split_characters

# Base directory for file paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ANNOTATION_DB_PATH = os.environ.get(
    'SHEET_ANNOTATION_DB', os.path.join(BASE_DIR, 'annotations.db'))

# Module logger
logger = logging.getLogger(__name__)


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Sets up structured logging with consistent format across all modules.
    Call this at application startup before importing route modules.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.

    Example:
        Configure at startup::

            from sheet_flask import configure_logging
            configure_logging(level='DEBUG', log_file='sheet_editor.log')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')


# Flask application
app = Flask(__name__)

# --- Global constants ---
MAX_TEXT_LENGTH = 5000
MAX_REPEAT_COUNT = 200
MAX_SHEET_CELLS = 100_000
MAX_GUIDE_SIZE = 1024.0
MAX_PREVIEW_SIDE = 4096
DEFAULT_PREVIEW_SCALE = 4.0

_annotation_provider = None


def get_annotation_provider():
    """Return the shared annotation provider, or None if there is no database.

    The SQLite provider is wrapped in an AnnotationCache and created on
    first use. A missing database file is not an error: sheets are simply
    built without pinyin.

    Returns:
        AnnotationCache | None: Cached provider over ANNOTATION_DB_PATH.
    """
    global _annotation_provider
    if _annotation_provider is None:
        if not os.path.exists(ANNOTATION_DB_PATH):
            logger.debug("No annotation database at %s", ANNOTATION_DB_PATH)
            return None
        _annotation_provider = AnnotationCache(SqliteAnnotationProvider(ANNOTATION_DB_PATH))
        logger.info("Annotation database: %s", ANNOTATION_DB_PATH)
    return _annotation_provider


def reset_annotation_provider() -> None:
    """Drop the cached provider so the next request reopens the database."""
    global _annotation_provider
    _annotation_provider = None


def error_response(message: str, status: int = 400):
    """Build a ``(jsonify(error=...), status)`` pair."""
    return jsonify(error=message), status


def validate_text_param(text) -> tuple[bool, tuple | None]:
    """Validate the text of a sheet request.

    Args:
        text: The ``text`` value from the request body. May be None.

    Returns:
        tuple: A 2-tuple of (is_valid, error_response) where error_response
            is None when valid, otherwise a (flask.Response, status_code)
            tuple ready to be returned from a route.

    Example:
        Using in a route handler::

            ok, err = validate_text_param(data.get('text'))
            if not ok:
                return err
    """
    if text is None:
        return True, None
    if not isinstance(text, str):
        return False, error_response("Text must be a string")
    if len(text) > MAX_TEXT_LENGTH:
        return False, error_response(f"Text longer than {MAX_TEXT_LENGTH} characters")
    return True, None


def parse_settings_or_error(data):
    """Parse layout settings or return an error response.

    Args:
        data: Mapping of settings (snake_case or camelCase), or None for
            the defaults.

    Returns:
        tuple: (settings, None) on success, or (None, error_response) if
            the settings are malformed or geometrically invalid.

    Example:
        settings, err = parse_settings_or_error(request.get_json().get('settings'))
        if err:
            return err
    """
    try:
        settings = LayoutSettings.from_dict(data).validate()
    except SheetError as e:
        logger.debug("Rejected settings %r: %s", data, e)
        return None, error_response(str(e))
    except (TypeError, ValueError) as e:
        return None, error_response(f"Invalid settings: {e}")
    if settings.repeat_count > MAX_REPEAT_COUNT:
        return None, error_response(f"repeat_count larger than {MAX_REPEAT_COUNT}")
    return settings, None


def validate_sheet_size(text: str, settings) -> tuple[bool, tuple | None]:
    """Reject sheets with more than MAX_SHEET_CELLS cells.

    Returns:
        tuple: (is_valid, error_response), as validate_text_param.
    """
    cells = len(split_characters(text)) * settings.effective_repeat_count
    if cells > MAX_SHEET_CELLS:
        return False, error_response(f"Sheet would have {cells} cells, more than {MAX_SHEET_CELLS}")
    return True, None


def parse_float_arg(args, name: str, default: float):
    """Read a float query parameter.

    Returns:
        tuple: (value, None) or (None, error_response) when the value is
            not a number.
    """
    raw = args.get(name)
    if raw is None or raw == '':
        return default, None
    try:
        return float(raw), None
    except ValueError:
        return None, error_response(f"Query parameter '{name}' must be a number")
