"""Held-Karp dynamic programming for small, possibly asymmetric TSP instances.

The memo table is a dense arena over (visited set, last node) pairs:
``cost[mask, node]`` is the cheapest way to leave ``start``, visit exactly the
nodes of ``mask`` and stop at ``node``. A slot holding ``INFINITY`` is an
unreachable state; there is no separate membership structure.

Input edges equal to or above ``NO_EDGE`` are absent; edges below ``MIN_EDGE``
are rejected by the caller. Costs are int64: a stored cost is a sum of at most
``ncity`` edges in ``[MIN_EDGE, NO_EDGE)``, so it stays within
``ncity * NO_EDGE`` of zero, and a transient sum lies between
``MIN_EDGE * (ncity + 1)`` and ``INFINITY + NO_EDGE``. Nothing wraps.
"""
import logging
from itertools import combinations
from typing import List, NamedTuple, Optional, Tuple

import numpy as np
from tqdm import tqdm

from tsp_errors import InternalSolverError

NO_EDGE = (1 << 30) - 1
MIN_EDGE = -NO_EDGE
INFINITY = np.iinfo(np.int64).max // 4
PRACTICAL_NODE_LIMIT = 20

logger = logging.getLogger(__name__)


def as_cost_matrix(D) -> np.ndarray:
    """int64 copy of ``D`` with every absent edge clipped to NO_EDGE."""
    if len(D) == 0:
        return np.zeros((0, 0), dtype=np.int64)
    # clip before converting: "no edge" values may not fit in int64
    return np.array([[min(int(x), NO_EDGE) for x in row] for row in D], dtype=np.int64)


class DPTable(NamedTuple):
    ncity: int
    start: int
    cost: np.ndarray
    prev: np.ndarray

    @classmethod
    def empty(cls, ncity: int, start: int) -> "DPTable":
        # flat arena indexed by mask * ncity + node, viewed as (2**ncity, ncity)
        S_max = 1 << ncity
        cost = np.full(S_max * ncity, INFINITY, dtype=np.int64).reshape(S_max, ncity)
        prev = np.full(S_max * ncity, -1, dtype=np.int64).reshape(S_max, ncity)
        return cls(ncity, start, cost, prev)

    @property
    def full_mask(self) -> int:
        return (1 << self.ncity) - 1

    def lookup(self, mask: int, node: int) -> Optional[Tuple[int, Optional[int]]]:
        c = int(self.cost[mask, node])
        if c >= INFINITY:
            return None
        p = int(self.prev[mask, node])
        return c, (p if p >= 0 else None)

    def states(self) -> int:
        return int(np.count_nonzero(self.cost < INFINITY))


def _best_predecessor(reach: np.ndarray, edge: np.ndarray) -> Tuple[int, Optional[int]]:
    valid = (reach < INFINITY) & (edge < NO_EDGE)
    if not valid.any():
        return INFINITY, None
    candidate = np.where(valid, reach + edge, INFINITY)
    # argmin returns the first minimum, so the lowest node index wins ties
    best = int(np.argmin(candidate))
    return int(candidate[best]), best


def base_cases(D: np.ndarray, start: int) -> DPTable:
    ncity = len(D)
    table = DPTable.empty(ncity, start)
    for i in range(ncity):
        if i == start or D[start, i] >= NO_EDGE:
            continue
        mask = (1 << start) | (1 << i)
        table.cost[mask, i] = D[start, i]
        table.prev[mask, i] = start
    return table


def expand_stage(table: DPTable, D: np.ndarray, size: int) -> DPTable:
    """Fill every state whose visited set has ``size`` nodes.

    Only reads states of size ``size - 1``, so stages must run in increasing
    order of size.
    """
    start = table.start
    others = [v for v in range(table.ncity) if v != start]
    for subset in combinations(others, size - 1):
        mask = 1 << start
        for v in subset:
            mask |= 1 << v
        for e in subset:
            prev_mask = mask ^ (1 << e)
            cost, p = _best_predecessor(table.cost[prev_mask], D[:, e])
            if p is None:
                continue
            table.cost[mask, e] = cost
            table.prev[mask, e] = p
    return table


def build_table(D: np.ndarray, start: int, verbose: bool = False) -> DPTable:
    ncity = len(D)
    table = base_cases(D, start)
    logger.debug("Base cases: %d reachable states", table.states())
    stages = tqdm(range(3, ncity + 1), unit="stage", disable=not verbose)
    for size in stages:
        stages.set_description(f"Subsets of size {size}/{ncity}")
        expand_stage(table, D, size)
    logger.debug("Table complete: %d reachable states", table.states())
    return table


def close_tour(table: DPTable, D: np.ndarray) -> Tuple[int, Optional[int]]:
    """Cheapest return edge into start; (INFINITY, None) if there is none."""
    return _best_predecessor(table.cost[table.full_mask], D[:, table.start])


def reconstruct_tour(table: DPTable, last: int) -> List[int]:
    start = table.start
    mask, node = table.full_mask, last
    segment = []
    while node != start:
        if len(segment) >= table.ncity - 1:
            raise InternalSolverError(f"back-pointer walk exceeded {table.ncity - 1} steps")
        state = table.lookup(mask, node)
        if state is None:
            raise InternalSolverError(f"state (mask={mask:#b}, node={node}) missing during reconstruction")
        segment.append(node)
        _, p = state
        if p is None:
            if mask == (1 << start) | (1 << node):
                break
            raise InternalSolverError(f"state (mask={mask:#b}, node={node}) has no predecessor")
        mask ^= 1 << node
        node = p
    return [start] + segment[::-1] + [start]


class TSP_DP:
    def __init__(self, ncity: int, D, start: int = 0, verbose: bool = False) -> None:
        self.ncity = ncity
        self.D = as_cost_matrix(D)
        self.start = start
        self.verbose = verbose

    def solve(self) -> Tuple[int, List[int]]:
        if self.ncity == 0:
            return 0, []
        if self.ncity == 1:
            return 0, [self.start, self.start]
        if self.ncity > PRACTICAL_NODE_LIMIT:
            logger.warning("%d nodes: the table needs %d states and may not fit in memory.",
                           self.ncity, (1 << self.ncity) * self.ncity)

        table = build_table(self.D, self.start, verbose=self.verbose)
        cost, last = close_tour(table, self.D)
        if last is None:
            logger.debug("No Hamiltonian cycle through node %d.", self.start)
            return INFINITY, []
        try:
            tour = reconstruct_tour(table, last)
        except InternalSolverError as e:
            logger.error("Tour reconstruction failed: %s", e.message)
            return INFINITY, []
        return cost, tour
