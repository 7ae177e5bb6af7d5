from .ast import (
    Angle,
    AngleBisector,
    Bisector,
    Circle,
    Entity,
    Line,
    Midpoint,
    Plane,
    Point,
    Ray,
    Scene,
    Segment,
    Span,
)
from .parser import parse_scene, parse_entities, ResolutionError
from .config import RenderConfig, RenderOptions, get_render_config, set_render_config
from .renderer import render
from .surface import Surface, RecordingSurface, MatplotlibSurface
from .interaction import DragController, DragLock, MatplotlibDragBinding, hit_test
from .derive import topo_order, dependency_graph
from .printer import format_entity, print_scene
from .host import find_embedded_blocks, create_surface, SceneView, build_views

__all__ = [
    'Angle',
    'AngleBisector',
    'Bisector',
    'Circle',
    'Entity',
    'Line',
    'Midpoint',
    'Plane',
    'Point',
    'Ray',
    'Scene',
    'Segment',
    'Span',
    'parse_scene',
    'parse_entities',
    'ResolutionError',
    'RenderConfig',
    'RenderOptions',
    'get_render_config',
    'set_render_config',
    'render',
    'Surface',
    'RecordingSurface',
    'MatplotlibSurface',
    'DragController',
    'DragLock',
    'MatplotlibDragBinding',
    'hit_test',
    'topo_order',
    'dependency_graph',
    'format_entity',
    'print_scene',
    'find_embedded_blocks',
    'create_surface',
    'SceneView',
    'build_views',
]
