"""Least-cost paths on weighted 2D grids with A*."""

from gridpath.core.astar import AStarSearch, find_path
from gridpath.core.config import SearchConfig
from gridpath.core.errors import (
    GridError,
    InvalidEndpointError,
    MapFormatError,
    OutOfBoundsError,
    PathfindingError,
    SearchCancelledError,
    UnreachableError,
)
from gridpath.core.movement import manhattan, neighbors4
from gridpath.core.node import SearchNode
from gridpath.core.types import Cell, Grid, PathNode, SearchResult, SearchStatus, StepResult
from gridpath.maps import Scenario, load_map, parse_map

__version__ = "0.1.0"

__all__ = [
    "AStarSearch",
    "Cell",
    "Grid",
    "GridError",
    "InvalidEndpointError",
    "MapFormatError",
    "OutOfBoundsError",
    "PathNode",
    "PathfindingError",
    "Scenario",
    "SearchCancelledError",
    "SearchConfig",
    "SearchNode",
    "SearchResult",
    "SearchStatus",
    "StepResult",
    "UnreachableError",
    "find_path",
    "load_map",
    "manhattan",
    "neighbors4",
    "parse_map",
]
