from typing import Iterator, Optional, Tuple

from gridpath.core.movement import Heuristic, manhattan
from gridpath.core.types import Cell, PathNode


class SearchNode:
    """
    One grid cell under evaluation during a single search.

    g is fixed at construction (parent_g + terrain_cost). h and f stay None
    until calculate_scores() is called with a target. The parent link points
    back toward the start; a node never tracks its children.
    """

    __slots__ = ("_position", "_terrain_cost", "g", "h", "f", "parent")

    def __init__(self, x: int, y: int, terrain_cost: int, parent_g: int = 0):
        self._position: Cell = (x, y)
        self._terrain_cost = terrain_cost
        self.g: int = parent_g + terrain_cost
        self.h: Optional[int] = None
        self.f: Optional[int] = None
        self.parent: Optional["SearchNode"] = None

    @property
    def position(self) -> Cell:
        return self._position

    @property
    def x(self) -> int:
        return self._position[0]

    @property
    def y(self) -> int:
        return self._position[1]

    @property
    def terrain_cost(self) -> int:
        return self._terrain_cost

    @property
    def scored(self) -> bool:
        return self.f is not None

    def calculate_scores(self, target: Cell, heuristic: Heuristic = manhattan) -> None:
        self.h = heuristic(self._position, target)
        self.f = self.g + self.h

    def rebind(self, parent: "SearchNode", new_g: int) -> None:
        """Point at a better predecessor and refresh g/f in the same step."""
        if self.h is None:
            raise RuntimeError(f"node {self._position} rebound before scoring")
        self.parent = parent
        self.g = new_g
        self.f = new_g + self.h

    def priority(self) -> Tuple[int, int, int]:
        # lower f, then lower h, then deeper g
        return (self.f, self.h, -self.g)

    def iter_lineage(self) -> Iterator["SearchNode"]:
        node: Optional[SearchNode] = self
        while node is not None:
            yield node
            node = node.parent

    def to_path_node(self) -> PathNode:
        return PathNode(self.x, self.y, self._terrain_cost, self.g, self.h, self.f)

    def __repr__(self) -> str:
        return f"SearchNode({self.x}, {self.y}, cost={self._terrain_cost}, g={self.g}, h={self.h}, f={self.f})"
