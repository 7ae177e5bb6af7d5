"""Dependency graph over the entities of a scene.

References always point at entities declared earlier, so declaration order
is already a valid evaluation order for a parsed scene. The graph exists for
scenes assembled by hand and for evaluating derived values ahead of drawing.
"""

from __future__ import annotations

import heapq
from typing import Dict, Iterable, List, Sequence

from .ast import MIDPOINT, Entity, Scene
from .geometry import midpoint, position


def _first_by_id(entities: Sequence[Entity]) -> Dict[str, int]:
    index: Dict[str, int] = {}
    for i, entity in enumerate(entities):
        index.setdefault(entity.id, i)
    return index


def dependency_graph(entities: Sequence[Entity]) -> Dict[int, List[int]]:
    """Map each entity index to the indices of the entities it references.

    Dangling references are left out.
    """

    index = _first_by_id(entities)
    graph: Dict[int, List[int]] = {}
    for i, entity in enumerate(entities):
        graph[i] = [index[ref] for ref in entity.references if ref in index]
    return graph


def topo_order(entities: Sequence[Entity]) -> List[int]:
    """Return entity indices with every dependency ahead of its dependents.

    Ties keep declaration order. Raises ``ValueError`` on a reference cycle.
    """

    graph = dependency_graph(entities)
    pending = {i: len(set(deps)) for i, deps in graph.items()}
    dependents: Dict[int, List[int]] = {i: [] for i in graph}
    for i, deps in graph.items():
        for dep in set(deps):
            dependents[dep].append(i)

    ready = [i for i, count in pending.items() if count == 0]
    heapq.heapify(ready)
    order: List[int] = []
    while ready:
        i = heapq.heappop(ready)
        order.append(i)
        for nxt in dependents[i]:
            pending[nxt] -= 1
            if pending[nxt] == 0:
                heapq.heappush(ready, nxt)
    if len(order) != len(entities):
        stuck = sorted(entities[i].id for i, count in pending.items() if count > 0)
        raise ValueError(f"reference cycle between {', '.join(stuck)}")
    return order


def derive_midpoints(entities: Iterable[Entity], scene: Scene) -> None:
    """Write ``values.x``/``values.y`` for each midpoint among ``entities``.

    Midpoints whose sources have no position yet are left untouched.
    """

    for entity in entities:
        if entity.kind != MIDPOINT:
            continue
        a = position(scene.find(entity.start_id))
        b = position(scene.find(entity.end_id))
        if a is None or b is None:
            continue
        m = midpoint(a, b)
        entity.values['x'] = float(m[0])
        entity.values['y'] = float(m[1])


def derive_in_dependency_order(scene: Scene) -> None:
    entities = scene.entities
    derive_midpoints((entities[i] for i in topo_order(entities)), scene)


def clear_derived(scene: Scene) -> None:
    for entity in scene.entities:
        if entity.kind == MIDPOINT:
            entity.values.clear()


__all__ = [
    'dependency_graph',
    'topo_order',
    'derive_midpoints',
    'derive_in_dependency_order',
    'clear_derived',
]
