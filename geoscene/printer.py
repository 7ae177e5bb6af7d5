from typing import Iterable, Union

from .ast import (
    ANGLE,
    ANGLE_BISECTOR,
    BISECTOR,
    CIRCLE,
    LINE,
    MIDPOINT,
    POINT,
    RAY,
    SEGMENT,
    Entity,
    Scene,
)

_COMMANDS = {
    LINE: 'Line',
    SEGMENT: 'Segment',
    RAY: 'Ray',
    MIDPOINT: 'Midpoint',
    BISECTOR: 'Bisector',
    CIRCLE: 'Circle',
    ANGLE: 'Angle',
    ANGLE_BISECTOR: 'AngleBisector',
}


def _coord(value: float) -> str:
    return str(int(round(value)))


def format_entity(entity: Entity) -> str:
    """Return the command line that declares ``entity``.

    Points print their current coordinates rounded to integers.
    """
    if entity.kind == POINT:
        x = entity.values['x']
        y = entity.values['y']
        return f"Point {entity.id} ({_coord(x)}, {_coord(y)})"
    command = _COMMANDS.get(entity.kind)
    if command is None:
        raise ValueError(f"no command for entity kind {entity.kind!r}")
    return " ".join([command, entity.id, *entity.references])


def print_scene(scene: Union[Scene, Iterable[Entity]]) -> str:
    return "".join(format_entity(entity) + "\n" for entity in scene)
