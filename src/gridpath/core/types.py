# src/gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from gridpath.core.errors import (
    GridError,
    InvalidEndpointError,
    OutOfBoundsError,
    SearchCancelledError,
    UnreachableError,
)

Cell = Tuple[int, int]  # (col, row)


def _as_cost(v: Any, where: Cell) -> int:
    if isinstance(v, bool) or not isinstance(v, Integral):
        raise GridError(f"cell {where} has non-integer cost {v!r}")
    v = int(v)
    if v < 0:
        raise GridError(f"cell {where} has negative cost {v}")
    return v


@dataclass(frozen=True)
class Grid:
    """Immutable cost grid. 0 = impassable, >0 = cost of entering the cell."""

    width: int
    height: int
    cells: Tuple[Tuple[int, ...], ...]  # [row][col]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise GridError("grid must have at least one row and one column")
        if len(self.cells) != self.height or any(len(r) != self.width for r in self.cells):
            raise GridError("cells size mismatch")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        if isinstance(rows, np.ndarray):
            return cls.from_array(rows)
        try:
            rows = list(rows)
        except TypeError:
            raise GridError(f"grid must be a sequence of rows, got {type(rows).__name__}") from None
        if not rows:
            raise GridError("grid must have at least one row and one column")
        widths = []
        for y, row in enumerate(rows):
            try:
                widths.append(len(row))
            except TypeError:
                raise GridError(f"row {y} is not a sequence") from None
        width = widths[0]
        if not width:
            raise GridError("grid must have at least one row and one column")
        cells = []
        for y, row in enumerate(rows):
            if widths[y] != width:
                raise GridError(f"row {y} has {widths[y]} cells, expected {width}")
            cells.append(tuple(_as_cost(v, (x, y)) for x, v in enumerate(row)))
        return cls(width, len(cells), tuple(cells))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Grid":
        """Build from a (height, width) array of non-negative integers."""
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise GridError(f"expected a 2D array, got shape {arr.shape}")
        if arr.dtype.kind == "f":
            if not np.all(np.isfinite(arr)) or not np.all(np.mod(arr, 1) == 0):
                raise GridError("float grid contains non-integer costs")
            arr = arr.astype(np.int64)
        elif arr.dtype.kind not in "iu":
            raise GridError(f"unsupported grid dtype {arr.dtype}")
        return cls.from_rows(arr.tolist())

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def check_bounds(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(c, self.width, self.height)

    def is_block(self, c: Cell) -> bool:
        x, y = c
        return self.cells[y][x] == 0

    def cost_of(self, c: Cell) -> int:
        self.check_bounds(c)
        x, y = c
        v = self.cells[y][x]
        if v == 0:
            raise GridError("Asked cost of a BLOCK cell")
        return v


class SearchStatus(str, Enum):
    FOUND = "found"
    UNREACHABLE = "unreachable"
    INVALID_ENDPOINT = "invalid_endpoint"
    OUT_OF_BOUNDS = "out_of_bounds"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PathNode:
    x: int
    y: int
    difficulty: int
    g: int
    h: int
    f: int

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


@dataclass
class SearchResult:
    status: SearchStatus
    start: Cell
    goal: Cell
    path: Optional[List[PathNode]] = None  # goal first
    cost: int = 0
    offending: Optional[Cell] = None       # endpoint behind an out_of_bounds / invalid_endpoint status
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def cells(self) -> Optional[List[Cell]]:
        if self.path is None:
            return None
        return [n.cell for n in self.path]

    def cells_from_start(self) -> Optional[List[Cell]]:
        cells = self.cells()
        if cells is None:
            return None
        cells.reverse()
        return cells

    def raise_for_status(self) -> "SearchResult":
        """Return self when a path was found, else raise the matching error."""
        if self.status is SearchStatus.FOUND:
            return self
        if self.status is SearchStatus.UNREACHABLE:
            raise UnreachableError(self.start, self.goal)
        if self.status is SearchStatus.INVALID_ENDPOINT:
            raise InvalidEndpointError(self.offending)
        if self.status is SearchStatus.OUT_OF_BOUNDS:
            w = self.metrics.get("width", -1)
            h = self.metrics.get("height", -1)
            raise OutOfBoundsError(self.offending, w, h)
        raise SearchCancelledError(self.metrics.get("cancel_reason", "cancelled"))


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path" | "cancelled"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[PathNode]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
