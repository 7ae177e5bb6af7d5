from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterator, List, Optional, Tuple

POINT = 'point'
LINE = 'line'
SEGMENT = 'segment'
RAY = 'ray'
MIDPOINT = 'midpoint'
BISECTOR = 'bisector'
ANGLE = 'angle'
PLANE = 'plane'
CIRCLE = 'circle'
ANGLE_BISECTOR = 'angleBisector'

KINDS = (POINT, LINE, SEGMENT, RAY, MIDPOINT, BISECTOR, ANGLE, PLANE, CIRCLE, ANGLE_BISECTOR)


@dataclass
class Span:
    line: int
    col: int


@dataclass
class Entity:
    """One geometric object of a scene.

    ``values`` holds the numeric state: independent coordinates for points,
    a parse-time snapshot for line-like entities and renderer output for
    derived entities.
    """

    id: str
    span: Span = field(default_factory=lambda: Span(0, 0))
    values: Dict[str, float] = field(default_factory=dict)

    kind: ClassVar[str] = ''

    @property
    def references(self) -> Tuple[str, ...]:
        return ()


@dataclass
class Point(Entity):
    kind: ClassVar[str] = POINT


@dataclass
class _TwoPointEntity(Entity):
    start_id: str = ''
    end_id: str = ''

    @property
    def references(self) -> Tuple[str, ...]:
        return (self.start_id, self.end_id)


@dataclass
class Line(_TwoPointEntity):
    kind: ClassVar[str] = LINE


@dataclass
class Segment(_TwoPointEntity):
    kind: ClassVar[str] = SEGMENT


@dataclass
class Ray(_TwoPointEntity):
    kind: ClassVar[str] = RAY


@dataclass
class Midpoint(_TwoPointEntity):
    kind: ClassVar[str] = MIDPOINT


@dataclass
class Bisector(_TwoPointEntity):
    """Perpendicular bisector of the segment ``start_id``-``end_id``."""

    kind: ClassVar[str] = BISECTOR


@dataclass
class Circle(Entity):
    center_id: str = ''
    point_id: str = ''

    kind: ClassVar[str] = CIRCLE

    @property
    def references(self) -> Tuple[str, ...]:
        return (self.center_id, self.point_id)


@dataclass
class Angle(Entity):
    vertex_id: str = ''
    p1_id: str = ''
    p2_id: str = ''

    kind: ClassVar[str] = ANGLE

    @property
    def references(self) -> Tuple[str, ...]:
        return (self.vertex_id, self.p1_id, self.p2_id)


@dataclass
class AngleBisector(Entity):
    angle_id: str = ''

    kind: ClassVar[str] = ANGLE_BISECTOR

    @property
    def references(self) -> Tuple[str, ...]:
        return (self.angle_id,)


@dataclass
class Plane(Entity):
    kind: ClassVar[str] = PLANE


LINE_LIKE = {LINE: Line, SEGMENT: Segment, RAY: Ray}


@dataclass
class Scene:
    entities: List[Entity] = field(default_factory=list)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    def find(self, entity_id: str) -> Optional[Entity]:
        """Return the first entity declared with ``entity_id``."""
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def of_kind(self, kind: str) -> List[Entity]:
        return [entity for entity in self.entities if entity.kind == kind]

    @property
    def ids(self) -> List[str]:
        return [entity.id for entity in self.entities]
