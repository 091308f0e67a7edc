"""Exceptions raised by gridpath.

Search problems (bad endpoints, unreachable goals, cancellation) are normally
reported through ``SearchResult.status``; ``SearchResult.raise_for_status()``
turns them into the exceptions below when a caller prefers raising.
"""


class PathfindingError(Exception):
    """Base class for every gridpath error."""


class GridError(PathfindingError, ValueError):
    """The grid itself is malformed (empty, ragged, negative or non-integer)."""


class MapFormatError(GridError):
    """A map file could not be turned into a grid."""


class OutOfBoundsError(PathfindingError, IndexError):
    def __init__(self, cell, width: int, height: int):
        self.cell = tuple(cell)
        self.width = width
        self.height = height
        super().__init__(f"cell {self.cell} outside {width}x{height} grid")


class InvalidEndpointError(PathfindingError):
    def __init__(self, cell):
        self.cell = tuple(cell)
        super().__init__(f"endpoint {self.cell} is impassable")


class UnreachableError(PathfindingError):
    def __init__(self, start, goal):
        self.start = tuple(start)
        self.goal = tuple(goal)
        super().__init__(f"no path from {self.start} to {self.goal}")


class SearchCancelledError(PathfindingError):
    """The search hit its deadline, expansion budget or cancel hook."""
