"""2D drawing surfaces the renderer draws on.

A surface mirrors the immediate-mode drawing context of an HTML canvas:
paths are built with ``begin_path``/``move_to``/``line_to``/``arc`` and then
stroked or filled with the current style. Coordinates are surface-local with
the origin at the top-left corner and ``y`` pointing down.
"""

from __future__ import annotations

import math
import re
from typing import Any, List, Optional, Protocol, Tuple

import numpy as np
from matplotlib.patches import PathPatch
from matplotlib.path import Path

PathOp = Tuple[Any, ...]

_FONT_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)px\s+(.+?)\s*$')

_HALIGN = {'left': 'left', 'start': 'left', 'center': 'center', 'right': 'right', 'end': 'right'}
_VALIGN = {
    'top': 'top',
    'hanging': 'top',
    'middle': 'center',
    'alphabetic': 'baseline',
    'ideographic': 'baseline',
    'bottom': 'bottom',
}


class Surface(Protocol):
    width: int
    height: int
    stroke_style: str
    fill_style: str
    line_width: float
    font: str
    text_align: str
    text_baseline: str

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def arc(
        self, x: float, y: float, radius: float, start: float, end: float, anticlockwise: bool = False
    ) -> None: ...

    def close_path(self) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


class _PathSurface:
    """Shared style state and path building."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.stroke_style = 'black'
        self.fill_style = 'black'
        self.line_width = 1.0
        self.font = '10px sans-serif'
        self.text_align = 'start'
        self.text_baseline = 'alphabetic'
        self._path: List[PathOp] = []

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(('M', float(x), float(y)))

    def line_to(self, x: float, y: float) -> None:
        self._path.append(('L', float(x), float(y)))

    def arc(
        self, x: float, y: float, radius: float, start: float, end: float, anticlockwise: bool = False
    ) -> None:
        self._path.append(
            ('A', float(x), float(y), float(radius), float(start), float(end), bool(anticlockwise))
        )

    def close_path(self) -> None:
        self._path.append(('Z',))

    @property
    def current_path(self) -> Tuple[PathOp, ...]:
        return tuple(self._path)


class RecordingSurface(_PathSurface):
    """Surface that keeps a log of every drawing operation instead of pixels.

    Each stroke, fill and text call is logged as a tuple carrying the style
    in effect and the path at that moment, which makes two frames directly
    comparable.
    """

    def __init__(self, width: int = 500, height: int = 500):
        super().__init__(width, height)
        self.ops: List[PathOp] = []

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        if x <= 0 and y <= 0 and x + w >= self.width and y + h >= self.height:
            self.ops = []
        self.ops.append(('clear', float(x), float(y), float(w), float(h)))

    def stroke(self) -> None:
        self.ops.append(('stroke', self.stroke_style, float(self.line_width), self.current_path))

    def fill(self) -> None:
        self.ops.append(('fill', self.fill_style, self.current_path))

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.ops.append(
            ('text', text, float(x), float(y), self.fill_style, self.font, self.text_align, self.text_baseline)
        )

    def strokes(self, color: Optional[str] = None) -> List[PathOp]:
        return [op for op in self.ops if op[0] == 'stroke' and (color is None or op[1] == color)]

    def fills(self, color: Optional[str] = None) -> List[PathOp]:
        return [op for op in self.ops if op[0] == 'fill' and (color is None or op[1] == color)]

    def texts(self) -> List[str]:
        return [op[1] for op in self.ops if op[0] == 'text']


def _arc_points(
    x: float, y: float, radius: float, start: float, end: float, anticlockwise: bool, step: float = math.pi / 90
) -> np.ndarray:
    full = 2 * math.pi
    if not anticlockwise:
        sweep = end - start
        sweep = full if sweep >= full else sweep % full
    else:
        sweep = start - end
        sweep = -(full if sweep >= full else sweep % full)
    count = max(int(abs(sweep) / step), 1) + 1
    t = start + np.linspace(0.0, sweep, count)
    return np.column_stack([x + radius * np.cos(t), y + radius * np.sin(t)])


def to_mpl_path(ops: Tuple[PathOp, ...]) -> Optional[Path]:
    """Convert recorded path operations into a matplotlib ``Path``."""

    vertices: List[Tuple[float, float]] = []
    codes: List[int] = []
    subpath_start: Optional[Tuple[float, float]] = None
    for op in ops:
        if op[0] == 'M':
            vertices.append((op[1], op[2]))
            codes.append(Path.MOVETO)
            subpath_start = (op[1], op[2])
        elif op[0] == 'L':
            if not codes:
                vertices.append((op[1], op[2]))
                codes.append(Path.MOVETO)
                subpath_start = (op[1], op[2])
                continue
            vertices.append((op[1], op[2]))
            codes.append(Path.LINETO)
        elif op[0] == 'A':
            pts = _arc_points(*op[1:])
            first = (float(pts[0][0]), float(pts[0][1]))
            if codes:
                vertices.append(first)
                codes.append(Path.LINETO)
            else:
                vertices.append(first)
                codes.append(Path.MOVETO)
                subpath_start = first
            for px, py in pts[1:]:
                vertices.append((float(px), float(py)))
                codes.append(Path.LINETO)
        elif op[0] == 'Z' and subpath_start is not None:
            vertices.append(subpath_start)
            codes.append(Path.CLOSEPOLY)
    if not codes:
        return None
    if not np.all(np.isfinite(np.asarray(vertices, dtype=float))):
        return None
    return Path(vertices, codes)


def _font_props(font: str) -> Tuple[float, str]:
    m = _FONT_RE.match(font)
    if not m:
        return 10.0, 'sans-serif'
    # px -> pt at 96 dpi
    return float(m.group(1)) * 0.75, m.group(2)


class MatplotlibSurface(_PathSurface):
    """Surface backed by a matplotlib ``Axes`` spanning ``width`` x ``height``.

    The axes are configured so data coordinates are surface-local pixels with
    ``y`` growing downwards. ``clear_rect`` removes everything this surface
    has drawn and raises ``NotImplementedError`` for a partial rectangle.
    """

    def __init__(self, ax, width: int = 500, height: int = 500, background: str = '#1e1e1e'):
        super().__init__(width, height)
        self.ax = ax
        self.background = background
        self._artists: List[Any] = []
        self._setup_axes()

    def _setup_axes(self) -> None:
        ax = self.ax
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_aspect('equal', adjustable='box')
        ax.set_facecolor(self.background)
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_position([0.0, 0.0, 1.0, 1.0])
        ax.figure.set_facecolor(self.background)

    @property
    def figure(self):
        return self.ax.figure

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        if x > 0 or y > 0 or x + w < self.width or y + h < self.height:
            raise NotImplementedError("MatplotlibSurface only clears the whole surface")
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def stroke(self) -> None:
        path = to_mpl_path(self.current_path)
        if path is None:
            return
        patch = PathPatch(
            path,
            fill=False,
            edgecolor=self.stroke_style,
            linewidth=self.line_width,
            capstyle='butt',
            joinstyle='miter',
        )
        self._artists.append(self.ax.add_patch(patch))

    def fill(self) -> None:
        path = to_mpl_path(self.current_path)
        if path is None:
            return
        patch = PathPatch(path, facecolor=self.fill_style, edgecolor='none', linewidth=0)
        self._artists.append(self.ax.add_patch(patch))

    def fill_text(self, text: str, x: float, y: float) -> None:
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        size, family = _font_props(self.font)
        artist = self.ax.text(
            float(x),
            float(y),
            text,
            color=self.fill_style,
            fontsize=size,
            fontfamily=[family, 'sans-serif'],
            ha=_HALIGN.get(self.text_align, 'left'),
            va=_VALIGN.get(self.text_baseline, 'baseline'),
            clip_on=True,
        )
        self._artists.append(artist)

    def redraw(self) -> None:
        self.figure.canvas.draw_idle()
