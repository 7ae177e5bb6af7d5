"""Host side: find geometry blocks in Markdown and give each one a surface."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

import matplotlib.pyplot as plt

from .ast import Scene
from .config import RenderConfig, RenderOptions, get_render_config
from .interaction import DragController, DragLock, LockLike, MatplotlibDragBinding
from .parser import parse_scene
from .renderer import render
from .surface import MatplotlibSurface

logger = logging.getLogger(__name__)

BLOCK_LANGUAGE = 'geometry'

_FENCE_OPEN_RE = re.compile(r'^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})\s*(?P<info>[^\s`]*)[^`]*$')


def find_embedded_blocks(markdown: str, language: str = BLOCK_LANGUAGE) -> List[str]:
    """Return the bodies of fenced code blocks tagged ``language``, in order.

    An unterminated block runs to the end of the document.
    """

    blocks: List[str] = []
    lines = markdown.splitlines()
    i = 0
    while i < len(lines):
        m = _FENCE_OPEN_RE.match(lines[i])
        if not m:
            i += 1
            continue
        fence = m.group('fence')
        info = m.group('info')
        close_re = re.compile(r'^ {0,3}' + re.escape(fence[0]) + '{' + str(len(fence)) + r',}\s*$')
        body: List[str] = []
        i += 1
        while i < len(lines) and not close_re.match(lines[i]):
            body.append(lines[i])
            i += 1
        i += 1
        if info == language:
            blocks.append('\n'.join(body))
    logger.info("Found %d %s block(s)", len(blocks), language)
    return blocks


def create_surface(size: Optional[int] = None, config: Optional[RenderConfig] = None) -> MatplotlibSurface:
    """Create a square surface on a new matplotlib figure."""

    cfg = config or get_render_config()
    size = size or cfg.surface_size
    dpi = 100
    fig = plt.figure(figsize=(size / dpi, size / dpi), dpi=dpi)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    return MatplotlibSurface(ax, size, size, background=cfg.background)


@dataclass
class SceneView:
    """One geometry block bound to its own surface and drag controller."""

    source: str
    lock: LockLike = field(default_factory=DragLock)
    options: Optional[RenderOptions] = None
    config: Optional[RenderConfig] = None
    strict: bool = False

    def __post_init__(self) -> None:
        self.config = self.config or get_render_config()
        self.scene: Scene = parse_scene(self.source, strict=self.strict)
        self.surface = create_surface(config=self.config)
        self.controller = DragController(
            self.scene, self.surface, lock=self.lock, options=self.options, config=self.config
        )
        self.binding: Optional[MatplotlibDragBinding] = None
        render(self.surface, self.scene, self.options, self.config)

    @property
    def figure(self):
        return self.surface.figure

    def enable_drag(self) -> MatplotlibDragBinding:
        if self.binding is None:
            self.binding = MatplotlibDragBinding(self.controller)
        return self.binding

    def save(self, path) -> None:
        self.figure.savefig(path, dpi=self.figure.dpi, facecolor=self.figure.get_facecolor())

    def close(self) -> None:
        if self.binding is not None:
            self.binding.disconnect()
            self.binding = None
        plt.close(self.figure)


def build_views(
    markdown: str,
    lock: Optional[LockLike] = None,
    options: Optional[RenderOptions] = None,
    strict: bool = False,
) -> List[SceneView]:
    """Create a view per geometry block; all views share ``lock``."""

    lock = lock if lock is not None else DragLock()
    return [
        SceneView(block, lock=lock, options=options, strict=strict)
        for block in find_embedded_blocks(markdown)
    ]
