"""Derivation rules for the dependent geometry of a scene.

Every function is a pure function of the coordinates it receives and is
re-evaluated on each frame. Routines return ``None`` when the requested
construction is degenerate (a zero-length direction or an anti-parallel
bisector sum) so the caller can skip drawing that one shape.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .ast import Entity

_EPS = 1e-12


def position(entity: Optional[Entity]) -> Optional[np.ndarray]:
    """Return the live ``(x, y)`` of ``entity`` or ``None`` when it has none yet."""

    if entity is None:
        return None
    x = entity.values.get('x')
    y = entity.values.get('y')
    if x is None or y is None:
        return None
    return np.array([x, y], dtype=float)


def _unit(vec: np.ndarray) -> Optional[np.ndarray]:
    length = float(np.hypot(vec[0], vec[1]))
    if length <= _EPS:
        return None
    return vec / length


def midpoint(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (a + b) / 2


def ray_far_point(start: np.ndarray, through: np.ndarray, length: float) -> Optional[np.ndarray]:
    """Point ``length`` units from ``start`` in the direction of ``through``."""

    u = _unit(through - start)
    if u is None:
        return None
    return start + u * length


def perpendicular_bisector(
    a: np.ndarray, b: np.ndarray, half_length: float
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Endpoints of the perpendicular bisector of ``a``-``b``, centred on its midpoint."""

    u = _unit(b - a)
    if u is None:
        return None
    mid = midpoint(a, b)
    normal = np.array([-u[1], u[0]])
    return mid - normal * half_length, mid + normal * half_length


@dataclass(frozen=True)
class AngleArc:
    center: np.ndarray
    start: float
    end: float
    degrees: int
    label_at: np.ndarray


def angle_arc(
    vertex: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    radius: float,
    label_offset: float,
) -> AngleArc:
    """Arc of the smaller angle at ``vertex`` between the rays to ``p1`` and ``p2``.

    The arc runs from ``start`` to ``end`` with ``end - start`` in ``[0, pi]``.
    When the sweep from ``p1`` to ``p2`` exceeds a half turn the endpoints
    are swapped and the new end is pushed a full turn ahead; the sweep is then
    reduced modulo a full turn, as a canvas arc would draw it.
    """

    d1 = p1 - vertex
    d2 = p2 - vertex
    start = math.atan2(d1[1], d1[0])
    end = math.atan2(d2[1], d2[0])

    diff = end - start
    if diff < 0:
        diff += 2 * math.pi
    if diff > math.pi:
        start, end = end, start + 2 * math.pi
    end = start + (end - start) % (2 * math.pi)

    degrees = math.floor(math.degrees(end - start) + 0.5)
    mid = (start + end) / 2
    label_at = vertex + np.array([math.cos(mid), math.sin(mid)]) * (radius + label_offset)
    return AngleArc(center=vertex, start=start, end=end, degrees=degrees, label_at=label_at)


def angle_bisector_direction(
    vertex: np.ndarray, p1: np.ndarray, p2: np.ndarray
) -> Optional[np.ndarray]:
    u1 = _unit(p1 - vertex)
    u2 = _unit(p2 - vertex)
    if u1 is None or u2 is None:
        return None
    return _unit(u1 + u2)


def circle_radius(center: np.ndarray, through: np.ndarray) -> float:
    d = through - center
    return float(np.hypot(d[0], d[1]))


def arrowhead(
    tail: np.ndarray, head: np.ndarray, offset: float, size: float
) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Triangle capping ``head``, pointing away from ``tail``.

    The tip sits ``offset`` units beyond ``head``; the base is ``size`` units
    behind the tip and ``size`` units to either side.
    """

    u = _unit(head - tail)
    if u is None:
        return None
    ux, uy = u
    tip = head + u * offset
    left = tip + np.array([-uy * size - ux * size, ux * size - uy * size])
    right = tip + np.array([uy * size - ux * size, -ux * size - uy * size])
    return tip, left, right
