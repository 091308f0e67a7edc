import logging
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from gridpath.core.movement import Heuristic, NeighborFn, manhattan, neighbors4

log = logging.getLogger(__name__)

ENV_MAX_EXPANSIONS = "GRIDPATH_MAX_EXPANSIONS"
ENV_TIMEOUT = "GRIDPATH_TIMEOUT"


@dataclass(frozen=True)
class SearchConfig:
    """
    Knobs for one search.

    heuristic / neighbors: movement model (Manhattan + 4-connected by default).
    max_expansions: stop as "cancelled" after this many nodes are closed.
    timeout: seconds per call, turned into a monotonic deadline at start.
    should_cancel: polled once per expansion; True stops the search.
    """

    heuristic: Heuristic = manhattan
    neighbors: NeighborFn = neighbors4
    max_expansions: Optional[int] = None
    timeout: Optional[float] = None
    should_cancel: Optional[Callable[[], bool]] = None

    def __post_init__(self):
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError("max_expansions must be >= 1")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must be >= 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SearchConfig":
        env = os.environ if environ is None else environ
        kwargs = {}

        raw = env.get(ENV_MAX_EXPANSIONS)
        if raw:
            try:
                value = int(raw)
                if value < 1:
                    raise ValueError(raw)
                kwargs["max_expansions"] = value
            except ValueError:
                log.warning("ignoring %s=%r (expected a positive integer)", ENV_MAX_EXPANSIONS, raw)

        raw = env.get(ENV_TIMEOUT)
        if raw:
            try:
                value = float(raw)
                if not value >= 0:
                    raise ValueError(raw)
                kwargs["timeout"] = value
            except ValueError:
                log.warning("ignoring %s=%r (expected seconds >= 0)", ENV_TIMEOUT, raw)

        kwargs.update(overrides)
        return cls(**kwargs)


DEFAULT_CONFIG = SearchConfig()
