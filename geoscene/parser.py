import logging
import re
from typing import List, Optional, Tuple

from .ast import (
    ANGLE,
    LINE_LIKE,
    Angle,
    AngleBisector,
    Bisector,
    Circle,
    Entity,
    Midpoint,
    Point,
    Scene,
    Span,
)
from .lexer import Token, tokenize_line
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")


class ResolutionError(Exception):
    """A command refers to an id that is missing or of the wrong kind."""

    def __init__(self, message: str, span: Span):
        super().__init__(f'[line {span.line}, col {span.col}] {message}')
        self.span = span


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')


def parse_id(cur: Cursor) -> Tuple[str, Span]:
    t = cur.expect('ID', 'NUMBER')
    return t[1], Span(t[2], t[3])


def parse_ids(cur: Cursor, count: int) -> List[Tuple[str, Span]]:
    return [parse_id(cur) for _ in range(count)]


def parse_int(cur: Cursor) -> int:
    t = cur.expect('NUMBER')
    try:
        return int(t[1])
    except ValueError:
        raise SyntaxError(f'[line {t[2]}, col {t[3]}] invalid integer {t[1][:20]}...') from None


def resolve(scene: Scene, ref: Tuple[str, Span]) -> Entity:
    entity_id, sp = ref
    entity = scene.find(entity_id)
    if entity is None:
        raise ResolutionError(f'unknown id {entity_id!r}', sp)
    return entity


def _snapshot(start: Entity, end: Entity) -> dict:
    values = {}
    for src, suffix in ((start, '1'), (end, '2')):
        for axis in ('x', 'y'):
            if axis in src.values:
                values[f'{axis}{suffix}'] = src.values[axis]
    return values


def parse_stmt(tokens: List[Token], scene: Scene) -> Optional[Entity]:
    """Build one entity from a tokenized line, resolving ids against ``scene``.

    Tokens after a complete command are ignored.
    """
    if not tokens:
        return None
    cur = Cursor(tokens)
    t0 = cur.expect('ID')
    kw = t0[1]
    sp = Span(t0[2], t0[3])

    if kw == 'Point':
        idv, _ = parse_id(cur)
        cur.expect('LPAREN')
        x = parse_int(cur)
        cur.expect('COMMA')
        y = parse_int(cur)
        cur.expect('RPAREN')
        return Point(idv, sp, {'x': x, 'y': y})
    if kw in ('Line', 'Segment', 'Ray'):
        (idv, _), start_ref, end_ref = parse_ids(cur, 3)
        start = resolve(scene, start_ref)
        end = resolve(scene, end_ref)
        cls = LINE_LIKE[kw.lower()]
        return cls(idv, sp, _snapshot(start, end), start_id=start.id, end_id=end.id)
    if kw in ('Midpoint', 'Bisector'):
        (idv, _), p1_ref, p2_ref = parse_ids(cur, 3)
        p1 = resolve(scene, p1_ref)
        p2 = resolve(scene, p2_ref)
        cls = Midpoint if kw == 'Midpoint' else Bisector
        return cls(idv, sp, {}, start_id=p1.id, end_id=p2.id)
    if kw == 'Circle':
        (idv, _), center_ref, point_ref = parse_ids(cur, 3)
        center = resolve(scene, center_ref)
        pt = resolve(scene, point_ref)
        return Circle(idv, sp, {}, center_id=center.id, point_id=pt.id)
    if kw == 'AngleBisector':
        (idv, _), angle_ref = parse_ids(cur, 2)
        angle = resolve(scene, angle_ref)
        if angle.kind != ANGLE:
            raise ResolutionError(f'{angle.id!r} is a {angle.kind}, expected an angle', angle_ref[1])
        return AngleBisector(idv, sp, {}, angle_id=angle.id)
    if kw == 'Angle':
        (idv, _), vertex_ref, p1_ref, p2_ref = parse_ids(cur, 4)
        vertex = resolve(scene, vertex_ref)
        p1 = resolve(scene, p1_ref)
        p2 = resolve(scene, p2_ref)
        return Angle(idv, sp, {}, vertex_id=vertex.id, p1_id=p1.id, p2_id=p2.id)
    raise SyntaxError(f'[line {t0[2]}, col {t0[3]}] unknown command "{kw}"')


def _augment_syntax_error(err: SyntaxError, line_text: str) -> Optional[SyntaxError]:
    message = str(err)
    if not line_text or "\n" in message:
        return None
    match = _ERROR_LOC_RE.search(message)
    if not match:
        return None
    col = max(int(match.group(2)), 1)
    caret_line = " " * (col - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return SyntaxError(f"{message}\n{snippet}")


@debug_log_call(logger)
def parse_scene(text: str, *, strict: bool = False) -> Scene:
    """Parse geometry commands into a scene.

    Lines that fail to parse or to resolve are dropped and parsing carries
    on with the next line. With ``strict=True`` the first failure is raised
    instead.
    """
    scene = Scene()
    for i, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            stmt = parse_stmt(tokenize_line(raw, i), scene)
        except SyntaxError as err:
            if strict:
                augmented = _augment_syntax_error(err, raw)
                if augmented is None:
                    raise
                raise augmented from None
            logger.debug("Skipping line %d: %s", i, err)
            continue
        except ResolutionError as err:
            if strict:
                raise
            logger.debug("Skipping line %d: %s", i, err)
            continue
        if stmt:
            scene.entities.append(stmt)
    return scene


def parse_entities(text: str) -> List[Entity]:
    return parse_scene(text).entities
