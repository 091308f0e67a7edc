#!/usr/bin/env python3
"""
A* over a weighted cost grid — one expansion per step(), or run() to finish.

Costs:
- Entering a cell costs its grid value; 0 cells are walls.
- The start cell's own cost is included, so g(start) = cost(start).

Open/closed bookkeeping:
- open_nodes / closed_nodes map each cell to its single live SearchNode.
- open_pq holds (f, h, -g, seq, cell); an entry whose key no longer matches
  the node in open_nodes is stale and skipped on pop.
- Ties: lower f, then lower h, then deeper g, then FIFO by seq. Among equal
  optima the returned path depends on this order and on the neighbor order.
"""

import heapq
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from gridpath.core.config import DEFAULT_CONFIG, SearchConfig
from gridpath.core.errors import InvalidEndpointError
from gridpath.core.node import SearchNode
from gridpath.core.types import Cell, Grid, PathNode, SearchResult, SearchStatus, StepResult

log = logging.getLogger(__name__)

GridLike = Union[Grid, Sequence[Sequence[int]], np.ndarray]

_TERMINAL = ("done", "no_path", "cancelled")


@dataclass
class AStarSearch:
    name: str = "A*"
    config: SearchConfig = DEFAULT_CONFIG

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    open_pq: List[Tuple[int, int, int, int, Cell]] = field(default_factory=list)  # (f, h, -g, seq, cell)
    open_nodes: Dict[Cell, SearchNode] = field(default_factory=dict)
    closed_nodes: Dict[Cell, SearchNode] = field(default_factory=dict)
    goal_node: Optional[SearchNode] = None
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    cancel_reason: Optional[str] = None
    deadline: Optional[float] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, goal: Cell) -> None:
        """Bind to a grid and endpoints, then reset.

        Raises OutOfBoundsError or InvalidEndpointError for bad endpoints.
        """
        for c in (start, goal):
            grid.check_bounds(c)
            if grid.is_block(c):
                raise InvalidEndpointError(c)
        self.grid = grid
        self.start = tuple(start)
        self.goal = tuple(goal)
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_nodes.clear()
        self.closed_nodes.clear()
        self.goal_node = None
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.cancel_reason = None
        self.seq = 0
        self.deadline = None
        if self.config.timeout is not None:
            self.deadline = time.monotonic() + self.config.timeout

        sx, sy = self.start
        s = SearchNode(sx, sy, self.grid.cost_of(self.start), 0)
        s.calculate_scores(self.goal, self.config.heuristic)
        self._push(s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _push(self, node: SearchNode) -> None:
        self.open_nodes[node.position] = node
        heapq.heappush(self.open_pq, (*node.priority(), self._bump(), node.position))

    def _cancel_check(self) -> Optional[str]:
        cfg = self.config
        if cfg.max_expansions is not None and self.popped_count >= cfg.max_expansions:
            return "max_expansions"
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return "timeout"
        if cfg.should_cancel is not None and cfg.should_cancel():
            return "cancelled"
        return None

    def _reconstruct_path(self, end: SearchNode) -> List[PathNode]:
        # goal first; the start node is the one without a parent
        return [n.to_path_node() for n in end.iter_lineage()]

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f open node and close it.
          - If it is the goal, reconstruct and finish.
          - Else score its neighbors and insert or improve them in the open set.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_node)
            return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if self.cancel_reason is None:
            self.cancel_reason = self._cancel_check()
        if self.cancel_reason is not None:
            return StepResult(status="cancelled", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        f_u, h_u, neg_g_u, _, u = heapq.heappop(self.open_pq)
        current = self.open_nodes.get(u)

        # Ignore stale pops
        if current is None or current.priority() != (f_u, h_u, neg_g_u):
            return StepResult(status="running", current=u, metrics=self._metrics())

        # Finalize u
        self.popped_count += 1
        del self.open_nodes[u]
        self.closed_nodes[u] = current

        if u == self.goal:
            self.done = True
            self.goal_node = current
            path = self._reconstruct_path(current)
            return StepResult(
                status="done",
                closed=[u],
                current=u,
                path=path,
                metrics=self._metrics(path_len=len(path)),
            )

        opened_now: List[Cell] = []
        for v in self.config.neighbors(self.grid, u):
            if v in self.closed_nodes:
                continue
            vx, vy = v
            nb = SearchNode(vx, vy, self.grid.cost_of(v), current.g)
            nb.calculate_scores(self.goal, self.config.heuristic)

            existing = self.open_nodes.get(v)
            if existing is None:
                nb.parent = current
                self._push(nb)
                opened_now.append(v)
            elif nb.f < existing.f:
                existing.rebind(current, nb.g)
                self._push(existing)

        return StepResult(
            status="running",
            opened=opened_now,
            closed=[u],
            current=u,
            metrics=self._metrics(),
        )

    def run(self) -> SearchResult:
        """Step until the search finishes, then package the outcome."""
        if self.grid is None:
            raise RuntimeError("run() called before init()")
        res = self.step()
        while res.status not in _TERMINAL:
            res = self.step()

        metrics = dict(res.metrics)
        if res.status == "done":
            log.debug("%s %s -> %s: cost %d, %d expanded", self.name, self.start, self.goal,
                      self.goal_node.g, self.popped_count)
            return SearchResult(SearchStatus.FOUND, self.start, self.goal,
                                path=res.path, cost=self.goal_node.g, metrics=metrics)
        if res.status == "cancelled":
            log.debug("%s %s -> %s cancelled (%s) after %d expansions", self.name, self.start,
                      self.goal, self.cancel_reason, self.popped_count)
            metrics["cancel_reason"] = self.cancel_reason
            return SearchResult(SearchStatus.CANCELLED, self.start, self.goal, metrics=metrics)
        log.debug("%s %s -> %s unreachable after %d expansions", self.name, self.start, self.goal,
                  self.popped_count)
        return SearchResult(SearchStatus.UNREACHABLE, self.start, self.goal, metrics=metrics)

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_nodes),
            "closed_count": len(self.closed_nodes),
            "path_len": path_len,
            "total_cost": self.goal_node.g if self.goal_node is not None else None,
        }


def find_path(
    grid: GridLike,
    start_x: int,
    start_y: int,
    goal_x: int,
    goal_y: int,
    *,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """
    Least-cost 4-connected path from (start_x, start_y) to (goal_x, goal_y).

    The grid is indexed [row][col], i.e. grid[y][x]; 0 marks a wall. The
    returned path runs goal first, and its cost includes the start cell.
    Bad endpoints and unreachable goals come back as a status, never an
    exception; a malformed grid raises GridError.
    """
    g = grid if isinstance(grid, Grid) else Grid.from_rows(grid)
    start = (start_x, start_y)
    goal = (goal_x, goal_y)

    for c in (start, goal):
        if not g.in_bounds(c):
            log.debug("endpoint %s outside %dx%d grid", c, g.width, g.height)
            return SearchResult(SearchStatus.OUT_OF_BOUNDS, start, goal, offending=c,
                                metrics={"width": g.width, "height": g.height})
    for c in (start, goal):
        if g.is_block(c):
            log.debug("endpoint %s is impassable", c)
            return SearchResult(SearchStatus.INVALID_ENDPOINT, start, goal, offending=c)

    search = AStarSearch(config=config or DEFAULT_CONFIG)
    search.init(g, start, goal)
    return search.run()
