"""
Movement model and heuristic for grid search.

The engine takes both as plain callables, so a caller can swap in another
movement rule or heuristic without touching the search loop:

- NeighborFn(grid, cell) -> list of passable cells reachable in one move.
- Heuristic(cell, goal) -> estimate of the remaining cost.
"""

from typing import Callable, List

from gridpath.core.types import Cell, Grid

NeighborFn = Callable[[Grid, Cell], List[Cell]]
Heuristic = Callable[[Cell, Cell], int]


def manhattan(a: Cell, b: Cell) -> int:
    """Admissible for 4-connected grids whose passable costs are all >= 1."""
    return abs(b[0] - a[0]) + abs(b[1] - a[1])


def neighbors4(grid: Grid, c: Cell) -> List[Cell]:
    """Return valid 4-connected neighbors for cell c."""
    x, y = c
    candidates: List[Cell] = [
        (x - 1, y),
        (x + 1, y),
        (x, y - 1),
        (x, y + 1),
    ]
    out: List[Cell] = []
    for n in candidates:
        if grid.in_bounds(n) and not grid.is_block(n):
            out.append(n)
    return out
