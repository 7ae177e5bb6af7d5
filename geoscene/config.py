"""Rendering and interaction constants."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class RenderConfig:
    surface_size: int = 500
    ray_length: float = 300.0
    bisector_half_length: float = 100.0
    angle_radius: float = 40.0
    angle_label_offset: float = 15.0
    angle_bisector_length: float = 100.0
    arrow_offset: float = 10.0
    arrow_size: float = 8.0
    point_radius: float = 5.0
    label_dx: float = 8.0
    hit_radius: float = 12.0
    line_width: float = 2.0
    outline_width: float = 1.0
    font: str = '12px Arial'
    background: str = '#1e1e1e'
    colors: Dict[str, str] = field(
        default_factory=lambda: {
            'line': 'white',
            'bisector': 'cyan',
            'angle': 'purple',
            'angleBisector': 'orange',
            'circle': 'lime',
            'point': 'yellow',
            'midpoint': 'orange',
            'outline': 'black',
            'label': 'white',
        }
    )

    def color(self, key: str) -> str:
        return self.colors.get(key, self.colors['line'])


@dataclass
class RenderOptions:
    """Per-call renderer switches.

    ``resolve_dependencies`` derives every midpoint in dependency order
    before anything is drawn, so shapes that reference a midpoint are drawn
    too. When off, midpoints are derived after the connecting geometry and
    such shapes are skipped.
    """

    resolve_dependencies: bool = False


_RENDER_CONFIG = RenderConfig()


def get_render_config() -> RenderConfig:
    return copy.deepcopy(_RENDER_CONFIG)


def set_render_config(config: RenderConfig) -> None:
    if not isinstance(config, RenderConfig):
        raise TypeError(f"expected RenderConfig, got {type(config).__name__}")
    if config.surface_size <= 0:
        raise ValueError("surface_size must be positive")
    global _RENDER_CONFIG
    _RENDER_CONFIG = copy.deepcopy(config)
