"""
JSON map files with raw terrain codes.

    {
      "width": 5, "height": 3,
      "cells": [[0, 0, 2, 1, 0], ...],     # raw terrain codes, [row][col]
      "start": [0, 0], "goal": [4, 2],     # (col, row)
      "move": 4,                           # optional, only 4 is supported
      "weights": {"2": 5, "9": "BLOCK"}    # optional raw code -> cost
    }

Raw code 1 is always a wall, as is any code weighted "BLOCK". Every other
code costs weights[str(code)], or 1 when it is not listed.
"""

import json
import logging
from dataclasses import dataclass
from numbers import Integral
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gridpath.core.astar import find_path
from gridpath.core.config import SearchConfig
from gridpath.core.errors import GridError, MapFormatError
from gridpath.core.types import Cell, Grid, SearchResult

log = logging.getLogger(__name__)

WALL_CODE = 1
BLOCK = "BLOCK"


@dataclass(frozen=True)
class Scenario:
    grid: Grid
    start: Cell
    goal: Cell
    name: str = ""

    def solve(self, config: Optional[SearchConfig] = None) -> SearchResult:
        return find_path(self.grid, *self.start, *self.goal, config=config)


def _is_int(v: Any) -> bool:
    return isinstance(v, Integral) and not isinstance(v, bool)


def _weight(code: Any, weights: Dict[str, Any]) -> int:
    if not _is_int(code):
        raise MapFormatError(f"cell code {code!r} is not an integer")
    w = weights.get(str(code), 1)
    if code == WALL_CODE or w == BLOCK:
        return 0
    if _is_int(w):
        return int(w)
    if isinstance(w, str):
        try:
            return int(w)
        except ValueError:
            pass
    raise MapFormatError(f"weight for {code!r} must be an integer or \"BLOCK\", got {w!r}")


def _translate(cells: List[List[Any]], weights: Dict[str, Any]) -> List[List[int]]:
    return [[_weight(v, weights) for v in row] for row in cells]


def _cell(data: Dict[str, Any], key: str) -> Cell:
    try:
        x, y = data[key]
    except KeyError:
        raise MapFormatError(f"missing '{key}'") from None
    except (TypeError, ValueError) as ex:
        raise MapFormatError(f"'{key}' must be a pair of integers: {ex}") from ex
    if not (_is_int(x) and _is_int(y)):
        raise MapFormatError(f"'{key}' must be a pair of integers, got {[x, y]!r}")
    return (int(x), int(y))


def parse_map(data: Dict[str, Any], name: str = "") -> Scenario:
    try:
        width = int(data["width"])
        height = int(data["height"])
        cells = data["cells"]
        move = int(data.get("move", 4))
    except KeyError as ex:
        raise MapFormatError(f"missing {ex}") from None
    except (TypeError, ValueError) as ex:
        raise MapFormatError(f"bad header field: {ex}") from ex

    if move != 4:
        raise MapFormatError(f"unsupported move={move}, only 4-connected maps are supported")
    if not isinstance(cells, list) or len(cells) != height or \
            any(not isinstance(r, list) or len(r) != width for r in cells):
        raise MapFormatError("cells size mismatch")

    weights = data.get("weights") or {}
    if not isinstance(weights, dict):
        raise MapFormatError("'weights' must be an object")

    try:
        grid = Grid.from_rows(_translate(cells, weights))
    except MapFormatError:
        raise
    except GridError as ex:
        raise MapFormatError(str(ex)) from ex

    start = _cell(data, "start")
    goal = _cell(data, "goal")
    # Bounds and passability of start/goal are left to find_path's statuses.
    return Scenario(grid, start, goal, name)


def load_map(path: Union[str, Path]) -> Scenario:
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise MapFormatError(f"{path}: {ex}") from ex
    if not isinstance(data, dict):
        raise MapFormatError(f"{path}: top level must be an object")
    log.debug("loaded map %s", path)
    return parse_map(data, name=path.stem)
