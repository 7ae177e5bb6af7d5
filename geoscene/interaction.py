"""Point dragging: hit-testing, capture and re-rendering on pointer input."""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Union

from .ast import POINT, Entity, Point, Scene
from .config import RenderConfig, RenderOptions, get_render_config
from .renderer import as_scene, render
from .surface import Surface

logger = logging.getLogger(__name__)


class DragLock:
    """Switch that disables dragging for every controller holding it.

    Hand one instance to several controllers to lock them together, or give
    each scene its own instance.
    """

    def __init__(self, locked: bool = False):
        self.locked = locked

    def toggle(self) -> bool:
        self.locked = not self.locked
        logger.info("Canvas drag is now %s", "locked" if self.locked else "unlocked")
        return self.locked

    def __bool__(self) -> bool:
        return self.locked

    def __repr__(self) -> str:
        return f"DragLock(locked={self.locked})"


LockLike = Union[DragLock, Callable[[], bool]]


def hit_test(entities: Sequence[Entity], x: float, y: float, radius: float) -> Optional[Point]:
    """Return the first point strictly closer than ``radius`` to ``(x, y)``."""

    for entity in entities:
        if entity.kind != POINT:
            continue
        px = entity.values.get('x')
        py = entity.values.get('y')
        if px is None or py is None:
            continue
        if math.hypot(px - x, py - y) < radius:
            return entity
    return None


class DragController:
    def __init__(
        self,
        entities: Union[Scene, Sequence[Entity]],
        surface: Surface,
        lock: Optional[LockLike] = None,
        on_change: Optional[Callable[[Point], None]] = None,
        options: Optional[RenderOptions] = None,
        config: Optional[RenderConfig] = None,
    ):
        self.scene = as_scene(entities)
        self.surface = surface
        self.lock = lock if lock is not None else DragLock()
        self.on_change = on_change
        self.options = options
        self.config = config or get_render_config()
        self.captured: Optional[Point] = None

    @property
    def locked(self) -> bool:
        if isinstance(self.lock, DragLock):
            return self.lock.locked
        return bool(self.lock())

    def render(self) -> None:
        render(self.surface, self.scene, self.options, self.config)

    def pointer_down(self, x: float, y: float) -> Optional[Point]:
        if self.locked:
            return None
        self.captured = hit_test(self.scene.entities, x, y, self.config.hit_radius)
        if self.captured is not None:
            logger.debug("Captured point %s at (%.1f, %.1f)", self.captured.id, x, y)
        return self.captured

    def pointer_move(self, x: float, y: float) -> bool:
        if self.captured is None or self.locked:
            return False
        self.captured.values['x'] = x
        self.captured.values['y'] = y
        self.render()
        if self.on_change is not None:
            self.on_change(self.captured)
        return True

    def pointer_up(self) -> None:
        self.captured = None

    def pointer_leave(self) -> None:
        self.captured = None


class MatplotlibDragBinding:
    """Feed matplotlib mouse events on ``surface``'s axes into a controller.

    Pressing ``toggle_key`` flips the controller's lock when it is a
    ``DragLock``.
    """

    def __init__(self, controller: DragController, toggle_key: Optional[str] = 'l'):
        self.controller = controller
        self.toggle_key = toggle_key
        self.ax = controller.surface.ax
        canvas = self.ax.figure.canvas
        self._cids: List[int] = [
            canvas.mpl_connect('button_press_event', self._on_press),
            canvas.mpl_connect('motion_notify_event', self._on_motion),
            canvas.mpl_connect('button_release_event', self._on_release),
            canvas.mpl_connect('axes_leave_event', self._on_leave),
            canvas.mpl_connect('figure_leave_event', self._on_leave),
            canvas.mpl_connect('key_press_event', self._on_key),
        ]

    def disconnect(self) -> None:
        canvas = self.ax.figure.canvas
        for cid in self._cids:
            canvas.mpl_disconnect(cid)
        self._cids = []

    def _on_press(self, e):
        if e.inaxes is not self.ax or e.xdata is None:
            return
        self.controller.pointer_down(e.xdata, e.ydata)

    def _on_motion(self, e):
        if e.inaxes is not self.ax or e.xdata is None:
            return
        if self.controller.pointer_move(e.xdata, e.ydata):
            self.ax.figure.canvas.draw_idle()

    def _on_release(self, e):
        self.controller.pointer_up()

    def _on_leave(self, e):
        self.controller.pointer_leave()

    def _on_key(self, e):
        if self.toggle_key and e.key == self.toggle_key and isinstance(self.controller.lock, DragLock):
            self.controller.lock.toggle()
