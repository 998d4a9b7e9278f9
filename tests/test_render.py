"""Tests for the layout & render engine."""

from __future__ import annotations

import numpy as np
import pytest

from mathsets.app.render import (
    HIDDEN_MARKER,
    PALETTES,
    CellState,
    Theme,
    cell_size,
    layout_cells,
    progress_percent,
    progress_text,
    render,
)
from mathsets.model.pascal import Cell, build_triangle, cell_to_step, step_to_cell, total_steps


def active_for(step: int, n: int) -> Cell | None:
    if step < 0:
        return None
    cell = step_to_cell(step, n)
    return None if cell.is_edge else cell


class TestLayout:
    @pytest.mark.parametrize(
        "n, w, h, expected",
        [
            (6, 800, 600, 48.0),   # roomy viewport hits the upper bound
            (10, 300, 400, 32.0),  # cramped viewport hits the lower bound
            (10, 480, 600, 40.0),  # width-limited
            (8, 2000, 465, 45.0),  # height-limited: (465 - 60) / 9
        ],
    )
    def test_cell_size_clamped(self, n, w, h, expected):
        assert cell_size(n, w, h) == pytest.approx(expected)

    def test_centers_indexed_by_step(self):
        size, centers = layout_cells(5, 800, 600)
        assert centers.shape == (total_steps(5), 2)

    def test_rows_centered_independently(self):
        w = 900
        size, centers = layout_cells(6, w, 700)
        for r in range(6):
            row = centers[[cell_to_step(r, c) for c in range(r + 1)]]
            assert row[:, 0].mean() == pytest.approx(w / 2)

    def test_spacing(self):
        size, centers = layout_cells(5, 800, 600)
        a = centers[cell_to_step(3, 1)]
        b = centers[cell_to_step(3, 2)]
        below = centers[cell_to_step(4, 2)]
        assert b[0] - a[0] == pytest.approx(size * 1.25)
        assert below[1] - a[1] == pytest.approx(size * 1.5)
        assert centers[0][1] == pytest.approx(40 + size / 2)

    def test_layout_tracks_viewport(self):
        _, small = layout_cells(4, 400, 300)
        _, large = layout_cells(4, 1000, 300)
        assert not np.allclose(small, large)


class TestProgress:
    @pytest.mark.parametrize(
        "step, total, text",
        [
            (-1, 10, "Étape 0 / 10  (0%)"),
            (0, 10, "Étape 1 / 10  (10%)"),
            (4, 10, "Étape 5 / 10  (50%)"),
            (9, 10, "Étape 10 / 10  (100%)"),
            (0, 6, "Étape 1 / 6  (17%)"),
        ],
    )
    def test_text(self, step, total, text):
        assert progress_text(step, total) == text

    def test_percent_before_start(self):
        assert progress_percent(-1, 21) == 0


class TestRender:
    def test_degenerate_viewport_gives_empty_frame(self):
        triangle = build_triangle(4)
        for w, h in [(0, 600), (800, 0), (-5, -5)]:
            frame = render(triangle, 3, None, w, h, Theme.LIGHT)
            assert frame.is_empty
            assert frame.edges == []
            assert frame.formula is None

    def test_nothing_revealed_initially(self):
        triangle = build_triangle(5)
        frame = render(triangle, -1, None, 800, 600)
        assert len(frame.cells) == 15
        assert all(g.state is CellState.HIDDEN for g in frame.cells)
        assert all(g.text == HIDDEN_MARKER for g in frame.cells)
        assert frame.edges == []
        assert frame.formula is None

    @pytest.mark.parametrize("step", range(-1, 21))
    def test_hidden_cells_never_leak_values(self, step):
        n = 6
        triangle = build_triangle(n)
        frame = render(triangle, step, active_for(step, n), 800, 600)
        for i, glyph in enumerate(frame.cells):
            if i > step:
                assert glyph.state is CellState.HIDDEN
                assert glyph.text == HIDDEN_MARKER
            else:
                assert glyph.text == str(triangle[glyph.cell.row][glyph.cell.col])

    def test_cell_states(self):
        n = 4
        triangle = build_triangle(n)
        frame = render(triangle, 4, Cell(2, 1), 800, 600)
        assert frame.glyph_at(0, 0).state is CellState.REVEALED
        assert frame.glyph_at(2, 0).state is CellState.REVEALED
        assert frame.glyph_at(2, 1).state is CellState.ACTIVE
        assert frame.glyph_at(2, 2).state is CellState.HIDDEN

    def test_current_edge_cell_is_highlighted_without_formula(self):
        triangle = build_triangle(4)
        frame = render(triangle, 3, None, 800, 600)
        glyph = frame.glyph_at(2, 0)
        assert glyph.state is CellState.CURRENT
        assert glyph.glow
        assert glyph.border == PALETTES[Theme.LIGHT].accent
        assert frame.formula is None

    def test_edge_cells_keep_edge_treatment(self):
        triangle = build_triangle(5)
        palette = PALETTES[Theme.DARK]
        frame = render(triangle, 9, None, 800, 600, Theme.DARK)
        for cell in [Cell(0, 0), Cell(1, 0), Cell(2, 2), Cell(3, 0)]:
            glyph = frame.glyph_at(*cell)
            assert glyph.edge
            assert glyph.border == palette.edge
            assert glyph.text_color == palette.edge
        interior = frame.glyph_at(2, 1)
        assert not interior.edge
        assert interior.border == palette.cell_border

    def test_formula_for_active_addition(self):
        triangle = build_triangle(3)
        frame = render(triangle, 4, Cell(2, 1), 640, 480)
        glyph = frame.glyph_at(2, 1)
        assert frame.formula is not None
        assert frame.formula.text == "1 + 1 = 2"
        assert frame.formula.x == pytest.approx(glyph.x)
        assert frame.formula.y > glyph.y

    def test_edges_only_for_revealed_cells(self):
        triangle = build_triangle(3)
        frame = render(triangle, 4, Cell(2, 1), 640, 480)
        children = sorted({e.child for e in frame.edges})
        assert children == [Cell(1, 0), Cell(1, 1), Cell(2, 0), Cell(2, 1)]
        assert len(frame.edges) == 5

    def test_edges_emphasized_for_active_addition_only(self):
        triangle = build_triangle(3)
        frame = render(triangle, 4, Cell(2, 1), 640, 480)
        emphasized = [e for e in frame.edges if e.emphasized]
        assert {e.parent for e in emphasized} == {Cell(1, 0), Cell(1, 1)}
        assert all(e.child == Cell(2, 1) for e in emphasized)
        assert all(e.opacity == 1.0 for e in emphasized)
        dimmed = [e for e in frame.edges if not e.emphasized]
        assert all(e.opacity < 1.0 for e in dimmed)

    def test_no_emphasis_once_step_moves_on(self):
        triangle = build_triangle(3)
        frame = render(triangle, 5, None, 640, 480)
        assert not any(e.emphasized for e in frame.edges)
        assert len(frame.edges) == 6
        assert frame.formula is None

    def test_edges_run_from_parent_bottom_to_child_top(self):
        triangle = build_triangle(3)
        frame = render(triangle, 2, None, 640, 480)
        edge = next(e for e in frame.edges if e.child == Cell(1, 0))
        parent = frame.glyph_at(0, 0)
        child = frame.glyph_at(1, 0)
        assert edge.start[1] == pytest.approx(parent.y + parent.size / 2 + 2)
        assert edge.end[1] == pytest.approx(child.y - child.size / 2 - 2)

    def test_theme_changes_colors_not_layout(self):
        triangle = build_triangle(4)
        light = render(triangle, 5, None, 800, 600, Theme.LIGHT)
        dark = render(triangle, 5, None, 800, 600, Theme.DARK)
        assert light.background != dark.background
        assert [(g.x, g.y) for g in light.cells] == [(g.x, g.y) for g in dark.cells]

    def test_progress_matches_step(self):
        triangle = build_triangle(4)
        frame = render(triangle, 4, None, 800, 600)
        assert frame.progress_text == "Étape 5 / 10  (50%)"
        assert frame.progress_percent == 50
