"""
Layout & Render Engine
======================
Turns (triangle, step, active addition, viewport, theme) into a `Frame`: a flat
list of drawing primitives that the Qt canvas paints verbatim.

Why is this file Qt-free?
-------------------------
The frame is a pure function of its inputs. Keeping QPainter out of it means
the reveal rules (which cell shows its value, which arrows light up) can be
checked without a display, and the canvas stays a dumb painter.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from mathsets.model.pascal import Cell, Triangle, addition_for, cell_to_step, iter_cells, parents_of, total_steps

if TYPE_CHECKING:
    import numpy.typing as npt

# -------------------------------------------------------------------------------
# Layout constants (pixels)
# -------------------------------------------------------------------------------

MIN_CELL_SIZE = 32.0
MAX_CELL_SIZE = 48.0
TOP_MARGIN = 40.0
BOTTOM_RESERVE = 60.0
GAP_RATIO = 0.25
CORNER_RADIUS = 8.0
HIDDEN_MARKER = "?"

# -------------------------------------------------------------------------------
# Theme
# -------------------------------------------------------------------------------


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Palette:
    background: str
    cell_bg: str
    cell_border: str
    text: str
    dim_text: str
    placeholder: str
    current_bg: str
    accent: str
    arrow: str
    addition: str
    edge: str


PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        background="#F8FAFC",
        cell_bg="#FFFFFF",
        cell_border="#E2E8F0",
        text="#1E293B",
        dim_text="#CBD5E1",
        placeholder="#40E2E8F0",
        current_bg="#FEF3C7",
        accent="#F59E0B",
        arrow="#64748B",
        addition="#10B981",
        edge="#3B82F6",
    ),
    Theme.DARK: Palette(
        background="#0F172A",
        cell_bg="#1E293B",
        cell_border="#334155",
        text="#F1F5F9",
        dim_text="#475569",
        placeholder="#401E293B",
        current_bg="#78350F",
        accent="#F59E0B",
        arrow="#94A3B8",
        addition="#10B981",
        edge="#3B82F6",
    ),
}

# -------------------------------------------------------------------------------
# Frame model
# -------------------------------------------------------------------------------


class CellState(Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    CURRENT = "current"
    ACTIVE = "active"  # current step and target of the active addition


@dataclass
class CellGlyph:
    cell: Cell
    x: float
    y: float
    size: float
    state: CellState
    text: str
    edge: bool
    fill: str
    border: str
    border_width: float
    text_color: str
    font_size: float
    glow: bool = False


@dataclass
class EdgeGlyph:
    parent: Cell
    child: Cell
    start: tuple[float, float]
    end: tuple[float, float]
    color: str
    width: float
    opacity: float
    emphasized: bool = False


@dataclass
class FormulaGlyph:
    text: str
    x: float
    y: float
    color: str
    font_size: float


@dataclass
class Frame:
    width: int
    height: int
    background: str | None = None
    cells: list[CellGlyph] = field(default_factory=list)
    edges: list[EdgeGlyph] = field(default_factory=list)
    formula: FormulaGlyph | None = None
    progress_text: str = ""
    progress_color: str = ""
    progress_percent: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def glyph_at(self, row: int, col: int) -> CellGlyph:
        return self.cells[cell_to_step(row, col)]

# -------------------------------------------------------------------------------
# Layout
# -------------------------------------------------------------------------------


def cell_size(n: int, width: float, height: float) -> float:
    """Cell edge length, clamped so small triangles don't balloon and big ones stay legible."""
    fit = min(width / (n + 2), (height - BOTTOM_RESERVE) / (n + 1))
    return float(min(MAX_CELL_SIZE, max(MIN_CELL_SIZE, fit)))


def layout_cells(n: int, width: float, height: float) -> tuple[float, npt.NDArray[np.float64]]:
    """
    Compute the centre of every cell.

    Returns:
        (size, centers) where centers is a (total_steps(n), 2) array indexed by
        step, so centers[cell_to_step(r, c)] is the (x, y) of cell (r, c).
    """
    size = cell_size(n, width, height)
    gap = size * GAP_RATIO
    pitch = size + gap

    counts = np.arange(1, n + 1)
    rows = np.repeat(np.arange(n), counts)
    cols = np.concatenate([np.arange(k) for k in counts])

    row_width = (rows + 1) * pitch - gap
    xs = (width - row_width) / 2.0 + cols * pitch + size / 2.0
    ys = TOP_MARGIN + rows * (size + 2.0 * gap) + size / 2.0
    return size, np.column_stack([xs, ys]).astype(np.float64)


def progress_percent(step_index: int, total: int) -> int:
    if step_index < 0 or total <= 0:
        return 0
    # round half up
    return min(100, int(math.floor((step_index + 1) / total * 100 + 0.5)))


def progress_text(step_index: int, total: int) -> str:
    return f"Étape {max(0, step_index + 1)} / {total}  ({progress_percent(step_index, total)}%)"

# -------------------------------------------------------------------------------
# Render
# -------------------------------------------------------------------------------


def render(
    triangle: Triangle,
    step_index: int,
    active_addition: Cell | None,
    width: float,
    height: float,
    theme: Theme = Theme.LIGHT,
) -> Frame:
    """
    Build the frame for the current animation state.

    A cell is revealed once its step is <= step_index. Hidden cells carry the
    '?' marker only, so a value never shows before its step.

    Args:
        triangle: Rows built by `build_triangle`.
        step_index: Current step in [-1, total_steps - 1].
        active_addition: Interior cell being explained, or None.
        width, height: Viewport size in pixels.
        theme: Light or dark palette.

    Returns:
        The frame; empty when the viewport has no area.
    """
    if width <= 0 or height <= 0:
        return Frame(width=int(width), height=int(height))

    n = len(triangle)
    total = total_steps(n)
    palette = PALETTES[theme]
    size, centers = layout_cells(n, width, height)

    frame = Frame(
        width=int(width),
        height=int(height),
        background=palette.background,
        progress_text=progress_text(step_index, total),
        progress_color=palette.dim_text,
        progress_percent=progress_percent(step_index, total),
    )

    # arrows first so cells paint over them
    for cell in iter_cells(n):
        step = cell_to_step(*cell)
        if cell.row == 0 or step > step_index:
            continue
        emphasized = step == step_index and cell == active_addition
        cx, cy = centers[step]
        for parent in parents_of(cell):
            px, py = centers[cell_to_step(*parent)]
            lean = -0.15 if parent.col < cell.col else 0.15
            frame.edges.append(EdgeGlyph(
                parent=parent,
                child=cell,
                start=(float(px), float(py + size / 2 + 2)),
                end=(float(cx + lean * size), float(cy - size / 2 - 2)),
                color=palette.addition if emphasized else palette.arrow,
                width=2.5 if emphasized else 1.5,
                opacity=1.0 if emphasized else 0.4,
                emphasized=emphasized,
            ))

    for cell in iter_cells(n):
        step = cell_to_step(*cell)
        x, y = (float(v) for v in centers[step])
        value = triangle[cell.row][cell.col]

        if step > step_index:
            frame.cells.append(CellGlyph(
                cell=cell, x=x, y=y, size=size,
                state=CellState.HIDDEN,
                text=HIDDEN_MARKER,
                edge=False,
                fill=palette.placeholder,
                border=palette.placeholder,
                border_width=0.0,
                text_color=palette.dim_text,
                font_size=size * 0.3,
            ))
            continue

        current = step == step_index
        active = current and cell == active_addition
        if active:
            state = CellState.ACTIVE
        elif current:
            state = CellState.CURRENT
        else:
            state = CellState.REVEALED

        if current:
            fill, border, border_width, text_color = palette.current_bg, palette.accent, 2.5, palette.accent
        elif cell.is_edge:
            fill, border, border_width, text_color = palette.cell_bg, palette.edge, 1.5, palette.edge
        else:
            fill, border, border_width, text_color = palette.cell_bg, palette.cell_border, 1.5, palette.text

        frame.cells.append(CellGlyph(
            cell=cell, x=x, y=y, size=size,
            state=state,
            text=str(value),
            edge=cell.is_edge,
            fill=fill,
            border=border,
            border_width=border_width,
            text_color=text_color,
            font_size=size * 0.4,
            glow=current,
        ))

        if active:
            addition = addition_for(triangle, cell)
            if addition is not None:
                frame.formula = FormulaGlyph(
                    text=addition.formula,
                    x=x,
                    y=y + size / 2 + 8,
                    color=palette.addition,
                    font_size=size * 0.38,
                )

    return frame
