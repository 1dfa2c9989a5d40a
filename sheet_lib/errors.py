"""Exception types raised by the sheet layout package.

Only genuinely invalid input raises. Degenerate but finite geometry (a
grid cell wider than the page, a zero repeat count) is clamped by the
pagination engine, and unknown grid styles fall back to the tian guide.
"""

from __future__ import annotations


class SheetError(Exception):
    """Base class for sheet layout errors."""


class InvalidDimension(SheetError, ValueError):
    """A size or margin is non-positive, negative or non-finite.

    Attributes:
        name: Name of the offending input (e.g. 'grid_size', 'margin.top').
        value: The rejected value.
    """

    def __init__(self, name: str, value, reason: str = 'must be positive'):
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class AnnotationLookupError(SheetError):
    """An annotation source failed to answer (as opposed to having no data)."""
