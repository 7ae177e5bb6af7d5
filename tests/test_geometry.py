from __future__ import annotations

import math

import numpy as np
import pytest

from geoscene.ast import Midpoint, Point
from geoscene.geometry import (
    angle_arc,
    angle_bisector_direction,
    arrowhead,
    circle_radius,
    midpoint,
    perpendicular_bisector,
    position,
    ray_far_point,
)


def P(x: float, y: float) -> np.ndarray:
    return np.array([x, y], dtype=float)


def test_position_requires_both_coordinates() -> None:
    assert position(Point('A', values={'x': 1, 'y': 2})).tolist() == [1.0, 2.0]
    assert position(Midpoint('M', start_id='A', end_id='B')) is None
    assert position(None) is None


def test_ray_far_point_is_fixed_length() -> None:
    far = ray_far_point(P(0, 0), P(1, 0), 300)
    assert far[0] == 300
    assert far[1] == 0

    far = ray_far_point(P(10, 10), P(13, 14), 300)
    assert math.isclose(far[0], 10 + 180)
    assert math.isclose(far[1], 10 + 240)


def test_ray_far_point_degenerate() -> None:
    assert ray_far_point(P(5, 5), P(5, 5), 300) is None


def test_perpendicular_bisector_crosses_midpoint() -> None:
    a, b = perpendicular_bisector(P(0, 0), P(20, 0), 100)
    assert a.tolist() == pytest.approx([10, -100])
    assert b.tolist() == pytest.approx([10, 100])
    assert perpendicular_bisector(P(1, 1), P(1, 1), 100) is None


def test_midpoint_is_mean() -> None:
    assert midpoint(P(10, 20), P(30, 60)).tolist() == [20, 40]


def test_right_angle_measures_ninety() -> None:
    arc = angle_arc(P(0, 0), P(10, 0), P(0, 10), radius=40, label_offset=15)
    assert arc.degrees == 90
    assert arc.start == 0
    assert arc.end == pytest.approx(math.pi / 2)
    assert arc.label_at.tolist() == pytest.approx([55 * math.cos(math.pi / 4), 55 * math.sin(math.pi / 4)])


def test_reflex_sweep_is_swapped_to_smaller_arc() -> None:
    # p1 -> p2 sweeps 270 degrees, so the arc runs from p2 back round to p1
    arc = angle_arc(P(0, 0), P(0, 10), P(10, 0), radius=40, label_offset=15)
    assert arc.start == 0
    assert arc.end == pytest.approx(math.pi / 2)
    assert arc.degrees == 90


def test_arc_across_the_branch_cut_is_not_swapped() -> None:
    vertex = P(0, 0)
    p1 = P(math.cos(math.radians(170)), math.sin(math.radians(170)))
    p2 = P(math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    arc = angle_arc(vertex, p1, p2, radius=40, label_offset=15)
    assert arc.start == pytest.approx(math.radians(170))
    assert arc.end == pytest.approx(math.radians(190))
    assert arc.degrees == 20
    assert arc.label_at.tolist() == pytest.approx([-55, 0], abs=1e-9)


def test_swapped_arc_starts_at_second_ray() -> None:
    vertex = P(0, 0)
    p1 = P(math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    p2 = P(math.cos(math.radians(170)), math.sin(math.radians(170)))
    arc = angle_arc(vertex, p1, p2, radius=40, label_offset=15)
    assert arc.start == pytest.approx(math.radians(170))
    assert arc.end == pytest.approx(math.radians(190))
    assert arc.degrees == 20


def test_straight_angle_is_not_swapped() -> None:
    arc = angle_arc(P(0, 0), P(10, 0), P(-10, 0), radius=40, label_offset=15)
    assert arc.start == 0
    assert arc.end == pytest.approx(math.pi)
    assert arc.degrees == 180


def test_angle_degrees_are_rounded() -> None:
    for measure, expected in ((44.4, 44), (44.6, 45), (120.7, 121)):
        p2 = P(math.cos(math.radians(measure)), math.sin(math.radians(measure)))
        arc = angle_arc(P(0, 0), P(1, 0), p2, radius=40, label_offset=15)
        assert arc.degrees == expected


def test_angle_bisector_direction() -> None:
    d = angle_bisector_direction(P(0, 0), P(10, 0), P(0, 10))
    assert d.tolist() == pytest.approx([math.sqrt(0.5), math.sqrt(0.5)])


@pytest.mark.parametrize(
    'vertex, p1, p2',
    [
        ((0, 0), (10, 0), (-5, 0)),
        ((0, 0), (0, 0), (0, 10)),
    ],
)
def test_angle_bisector_degenerate(vertex, p1, p2) -> None:
    assert angle_bisector_direction(P(*vertex), P(*p1), P(*p2)) is None


def test_circle_radius_is_distance() -> None:
    assert circle_radius(P(100, 100), P(103, 104)) == 5


def test_arrowhead_geometry() -> None:
    tip, left, right = arrowhead(P(0, 0), P(100, 0), offset=10, size=8)
    assert tip.tolist() == [110, 0]
    assert left.tolist() == [102, 8]
    assert right.tolist() == [102, -8]
    assert arrowhead(P(3, 3), P(3, 3), offset=10, size=8) is None
