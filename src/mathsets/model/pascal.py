"""
Pascal's Triangle (Combinatorial Model)
=======================================
Builds the triangle and maps the linear animation step to a cell.

Cells are revealed in row-major order: step 0 is (0, 0) and row r occupies
steps [r(r+1)/2, r(r+1)/2 + r].

Classes:
    Cell: (row, col) coordinate of one entry.
    Addition: The sum that produces an interior entry.
"""
from __future__ import annotations

import math
from typing import Iterator, NamedTuple

from mathsets.exceptions import InvalidRowCountError, StepOutOfRangeError

Triangle = tuple[tuple[int, ...], ...]


class Cell(NamedTuple):
    row: int
    col: int

    @property
    def is_edge(self) -> bool:
        """Border cells are always 1 and are never the result of an addition."""
        return self.col == 0 or self.col == self.row


class Addition(NamedTuple):
    """Decomposition of an interior entry into its two parents."""
    left: int
    right: int
    value: int

    @property
    def formula(self) -> str:
        return f"{self.left} + {self.right} = {self.value}"


def build_triangle(n: int) -> Triangle:
    """
    Build rows 0..n-1 of Pascal's triangle.

    Args:
        n: Number of rows, must be >= 1.

    Returns:
        Immutable tuple of rows, row r holding C(r, 0) .. C(r, r).

    Raises:
        InvalidRowCountError: If n < 1.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidRowCountError(n, minimum=1)

    rows: list[tuple[int, ...]] = [(1,)]
    for r in range(1, n):
        prev = rows[r - 1]
        inner = [prev[c - 1] + prev[c] for c in range(1, r)]
        rows.append((1, *inner, 1))
    return tuple(rows)


def total_steps(n: int) -> int:
    """Number of cells (and animation steps) in an n-row triangle."""
    return n * (n + 1) // 2


def cell_to_step(row: int, col: int) -> int:
    """Row-major step index of the cell at (row, col)."""
    if row < 0 or col < 0 or col > row:
        raise StepOutOfRangeError(f"No cell at ({row}, {col}).")
    return row * (row + 1) // 2 + col


def step_to_cell(step: int, n: int) -> Cell:
    """
    Inverse of the row-major numbering.

    Raises:
        StepOutOfRangeError: If step is outside [0, total_steps(n) - 1].
    """
    total = total_steps(n)
    if step < 0 or step >= total:
        raise StepOutOfRangeError(
            f"Step {step} is outside [0, {total - 1}] for a {n}-row triangle.", step=step
        )
    # largest r with r(r+1)/2 <= step
    row = (math.isqrt(8 * step + 1) - 1) // 2
    return Cell(row, step - row * (row + 1) // 2)


def iter_cells(n: int) -> Iterator[Cell]:
    """Forward row-major enumeration of all cells."""
    for r in range(n):
        for c in range(r + 1):
            yield Cell(r, c)


def parents_of(cell: Cell) -> list[Cell]:
    """The parents that exist in the previous row (none for the apex)."""
    row, col = cell
    if row == 0:
        return []
    parents = []
    if col > 0:
        parents.append(Cell(row - 1, col - 1))
    if col < row:
        parents.append(Cell(row - 1, col))
    return parents


def addition_for(triangle: Triangle, cell: Cell) -> Addition | None:
    """The sum producing an interior cell, None for edge cells."""
    row, col = cell
    if cell.is_edge:
        return None
    return Addition(
        left=triangle[row - 1][col - 1],
        right=triangle[row - 1][col],
        value=triangle[row][col],
    )
