"""Geometric value objects for guide descriptors."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Union
import math

import numpy as np


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_list(self) -> List[float]:
        """Convert to list for JSON serialization."""
        return [float(self.x), float(self.y)]

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        """Create from tuple."""
        return cls(t[0], t[1])


@dataclass(frozen=True)
class LineSegment:
    """A straight guide line from start to end."""
    start: Point
    end: Point
    color: str
    width: float
    dash: str = 'solid'
    role: str = 'guide'  # 'border' or 'guide'

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def is_horizontal(self) -> bool:
        return abs(self.start.y - self.end.y) < 1e-9

    @property
    def is_vertical(self) -> bool:
        return abs(self.start.x - self.end.x) < 1e-9

    def to_dict(self) -> dict:
        return {
            'kind': 'line',
            'role': self.role,
            'x1': self.start.x, 'y1': self.start.y,
            'x2': self.end.x, 'y2': self.end.y,
            'color': self.color,
            'width': self.width,
            'dash': self.dash,
        }


@dataclass(frozen=True)
class Arc:
    """A circular arc; a full circle when sweep is 360 degrees.

    Angles use SVG orientation: 0 = rightmost point, 90 = down.
    """
    center: Point
    radius: float
    color: str
    width: float
    start_angle: float = 0.0
    sweep: float = 360.0
    dash: str = 'solid'
    role: str = 'guide'

    @property
    def is_full_circle(self) -> bool:
        return abs(self.sweep) >= 360.0

    def point_at(self, angle_deg: float) -> Point:
        a = math.radians(angle_deg)
        return Point(self.center.x + self.radius * math.cos(a),
                     self.center.y + self.radius * math.sin(a))

    def to_polyline(self, n_points: int = 64) -> np.ndarray:
        """Sample the arc as an (n, 2) array of points.

        Renderers that cannot draw arcs natively can stroke this polyline
        instead. A full circle repeats its first point at the end.
        """
        n_points = max(2, int(n_points))
        angles = np.radians(np.linspace(self.start_angle,
                                        self.start_angle + self.sweep,
                                        n_points))
        xs = self.center.x + self.radius * np.cos(angles)
        ys = self.center.y + self.radius * np.sin(angles)
        return np.column_stack([xs, ys])

    def to_dict(self) -> dict:
        return {
            'kind': 'arc',
            'role': self.role,
            'cx': self.center.x, 'cy': self.center.y,
            'r': self.radius,
            'start_angle': self.start_angle,
            'sweep': self.sweep,
            'color': self.color,
            'width': self.width,
            'dash': self.dash,
        }


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned, unfilled rectangle outline."""
    x: float
    y: float
    width: float
    height: float
    color: str
    stroke_width: float
    dash: str = 'solid'
    role: str = 'guide'

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict:
        return {
            'kind': 'rect',
            'role': self.role,
            'x': self.x, 'y': self.y,
            'w': self.width, 'h': self.height,
            'color': self.color,
            'width': self.stroke_width,
            'dash': self.dash,
        }


Primitive = Union[LineSegment, Arc, Rectangle]


@dataclass(frozen=True)
class GuideDescriptor:
    """Geometry-only description of the guide drawn inside one cell.

    Coordinates are in pixels relative to the cell's top-left corner.
    The primitive list has no fixed cap; renderers draw each in order.
    """
    grid_type: str
    size: float
    primitives: Tuple[Primitive, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.primitives)

    def __iter__(self):
        return iter(self.primitives)

    def lines(self) -> List[LineSegment]:
        return [p for p in self.primitives if isinstance(p, LineSegment)]

    def arcs(self) -> List[Arc]:
        return [p for p in self.primitives if isinstance(p, Arc)]

    def rectangles(self) -> List[Rectangle]:
        return [p for p in self.primitives if isinstance(p, Rectangle)]

    def by_role(self, role: str) -> List[Primitive]:
        return [p for p in self.primitives if p.role == role]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'grid_type': self.grid_type,
            'size': self.size,
            'primitives': [p.to_dict() for p in self.primitives],
        }
