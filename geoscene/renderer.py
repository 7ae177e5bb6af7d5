"""Frame renderer: recomputes every derived shape and redraws the scene."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Union

import numpy as np

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
from .config import RenderConfig, RenderOptions, get_render_config
from .derive import clear_derived, derive_in_dependency_order, derive_midpoints
from .geometry import (
    angle_arc,
    angle_bisector_direction,
    arrowhead,
    circle_radius,
    perpendicular_bisector,
    position,
    ray_far_point,
)
from .logging_utils import debug_log_call
from .surface import Surface

logger = logging.getLogger(__name__)

LINE_KINDS = (LINE, SEGMENT, RAY, BISECTOR)


def as_scene(entities: Union[Scene, Sequence[Entity]]) -> Scene:
    if isinstance(entities, Scene):
        return entities
    return Scene(entities if isinstance(entities, list) else list(entities))


def _stroke_segment(surface: Surface, a: np.ndarray, b: np.ndarray, color: str, width: float) -> None:
    surface.begin_path()
    surface.move_to(a[0], a[1])
    surface.line_to(b[0], b[1])
    surface.stroke_style = color
    surface.line_width = width
    surface.stroke()


def _draw_arrow(surface: Surface, tail: np.ndarray, head: np.ndarray, cfg: RenderConfig) -> None:
    triangle = arrowhead(tail, head, cfg.arrow_offset, cfg.arrow_size)
    if triangle is None:
        return
    tip, left, right = triangle
    surface.begin_path()
    surface.move_to(tip[0], tip[1])
    surface.line_to(left[0], left[1])
    surface.line_to(right[0], right[1])
    surface.close_path()
    surface.fill_style = surface.stroke_style
    surface.fill()


def _draw_line_like(surface: Surface, scene: Scene, entity: Entity, cfg: RenderConfig) -> None:
    a = position(scene.find(entity.start_id))
    b = position(scene.find(entity.end_id))
    if a is None or b is None:
        return

    if entity.kind == RAY:
        b = ray_far_point(a, b, cfg.ray_length)
        if b is None:
            return
    elif entity.kind == BISECTOR:
        ends = perpendicular_bisector(a, b, cfg.bisector_half_length)
        if ends is None:
            return
        a, b = ends

    color = cfg.color(BISECTOR if entity.kind == BISECTOR else LINE)
    _stroke_segment(surface, a, b, color, cfg.line_width)

    if entity.kind == LINE:
        _draw_arrow(surface, b, a, cfg)
        _draw_arrow(surface, a, b, cfg)
    elif entity.kind == RAY:
        _draw_arrow(surface, a, b, cfg)


def _angle_points(scene: Scene, angle: Optional[Entity]):
    if angle is None or angle.kind != ANGLE:
        return None
    vertex = position(scene.find(angle.vertex_id))
    p1 = position(scene.find(angle.p1_id))
    p2 = position(scene.find(angle.p2_id))
    if vertex is None or p1 is None or p2 is None:
        return None
    return vertex, p1, p2


def _draw_angle(surface: Surface, scene: Scene, entity: Entity, cfg: RenderConfig) -> None:
    pts = _angle_points(scene, entity)
    if pts is None:
        return
    arc = angle_arc(*pts, radius=cfg.angle_radius, label_offset=cfg.angle_label_offset)

    surface.begin_path()
    surface.arc(arc.center[0], arc.center[1], cfg.angle_radius, arc.start, arc.end, False)
    surface.stroke_style = cfg.color(ANGLE)
    surface.line_width = cfg.line_width
    surface.stroke()

    surface.font = cfg.font
    surface.fill_style = cfg.color('label')
    surface.text_align = 'center'
    surface.text_baseline = 'middle'
    surface.fill_text(f'{arc.degrees}°', arc.label_at[0], arc.label_at[1])


def _draw_angle_bisector(surface: Surface, scene: Scene, entity: Entity, cfg: RenderConfig) -> None:
    pts = _angle_points(scene, scene.find(entity.angle_id))
    if pts is None:
        return
    vertex = pts[0]
    direction = angle_bisector_direction(*pts)
    if direction is None:
        return
    end = vertex + direction * cfg.angle_bisector_length
    _stroke_segment(surface, vertex, end, cfg.color(ANGLE_BISECTOR), cfg.line_width)


def _draw_circle(surface: Surface, scene: Scene, entity: Entity, cfg: RenderConfig) -> None:
    center = position(scene.find(entity.center_id))
    through = position(scene.find(entity.point_id))
    if center is None or through is None:
        return
    surface.begin_path()
    surface.arc(center[0], center[1], circle_radius(center, through), 0, math.pi * 2)
    surface.stroke_style = cfg.color(CIRCLE)
    surface.line_width = cfg.line_width
    surface.stroke()


def _draw_marker(surface: Surface, entity: Entity, cfg: RenderConfig) -> None:
    p = position(entity)
    if p is None:
        return
    surface.begin_path()
    surface.arc(p[0], p[1], cfg.point_radius, 0, math.pi * 2)
    surface.fill_style = cfg.color(entity.kind)
    surface.fill()
    surface.stroke_style = cfg.color('outline')
    surface.line_width = cfg.outline_width
    surface.stroke()

    surface.font = cfg.font
    surface.fill_style = cfg.color('label')
    surface.text_align = 'left'
    surface.text_baseline = 'middle'
    surface.fill_text(entity.id, p[0] + cfg.label_dx, p[1])


@debug_log_call(logger, log_result=False)
def render(
    surface: Surface,
    scene: Union[Scene, Sequence[Entity]],
    options: Optional[RenderOptions] = None,
    config: Optional[RenderConfig] = None,
) -> None:
    """Clear ``surface`` and draw one frame of ``scene``.

    Shapes are drawn in layers: lines, segments, rays and bisectors first,
    then angles, angle bisectors and circles, then the point markers and
    finally midpoint markers. Midpoint coordinates are derived right before
    the markers, so any shape built on a midpoint is skipped unless
    ``options.resolve_dependencies`` is set. A shape whose inputs are
    missing or degenerate is skipped without affecting the rest of the
    frame.
    """
    scene = as_scene(scene)
    cfg = config or get_render_config()
    opts = options or RenderOptions()

    surface.clear_rect(0, 0, surface.width, surface.height)
    clear_derived(scene)
    if opts.resolve_dependencies:
        derive_in_dependency_order(scene)

    for entity in scene:
        if entity.kind in LINE_KINDS:
            _draw_line_like(surface, scene, entity, cfg)
    for entity in scene.of_kind(ANGLE):
        _draw_angle(surface, scene, entity, cfg)
    for entity in scene.of_kind(ANGLE_BISECTOR):
        _draw_angle_bisector(surface, scene, entity, cfg)
    for entity in scene.of_kind(CIRCLE):
        _draw_circle(surface, scene, entity, cfg)

    if not opts.resolve_dependencies:
        derive_midpoints(scene.entities, scene)

    for entity in scene.of_kind(POINT):
        _draw_marker(surface, entity, cfg)
    for entity in scene.of_kind(MIDPOINT):
        _draw_marker(surface, entity, cfg)
