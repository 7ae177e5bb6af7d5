import pytest

from geoscene.ast import Midpoint, Point, Scene, Segment
from geoscene.derive import (
    clear_derived,
    dependency_graph,
    derive_in_dependency_order,
    topo_order,
)
from geoscene.parser import parse_scene


def test_dependency_graph_uses_first_declaration():
    scene = parse_scene("Point A (0, 0)\nPoint B (1, 1)\nPoint A (5, 5)\nSegment s A B")

    assert dependency_graph(scene.entities) == {0: [], 1: [], 2: [], 3: [0, 1]}


def test_parsed_scene_order_is_declaration_order():
    scene = parse_scene("Point A (0, 0)\nPoint B (10, 0)\nMidpoint M A B\nMidpoint N M B")

    assert topo_order(scene.entities) == [0, 1, 2, 3]


def test_hand_built_scene_is_reordered():
    entities = [
        Midpoint('N', start_id='M', end_id='B'),
        Midpoint('M', start_id='A', end_id='B'),
        Point('A', values={'x': 0, 'y': 0}),
        Point('B', values={'x': 8, 'y': 0}),
    ]

    order = topo_order(entities)
    assert order.index(2) < order.index(1) < order.index(0)
    assert order.index(3) < order.index(1)

    scene = Scene(entities)
    derive_in_dependency_order(scene)
    assert scene.find('M').values == {'x': 4.0, 'y': 0.0}
    assert scene.find('N').values == {'x': 6.0, 'y': 0.0}

    clear_derived(scene)
    assert scene.find('N').values == {}
    assert scene.find('A').values == {'x': 0, 'y': 0}


def test_cycle_is_reported():
    entities = [
        Segment('s', start_id='t', end_id='t'),
        Segment('t', start_id='s', end_id='s'),
    ]

    with pytest.raises(ValueError, match="reference cycle between s, t"):
        topo_order(entities)


def test_dangling_reference_is_ignored():
    entities = [Segment('s', start_id='A', end_id='B')]

    assert dependency_graph(entities) == {0: []}
    assert topo_order(entities) == [0]
