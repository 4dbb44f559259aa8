import logging
from numbers import Integral
from typing import List, Sequence, Tuple

from tsp_dp import INFINITY, MIN_EDGE, TSP_DP
from tsp_errors import EmptyGraph, InvalidEdgeCost, NoPathFound, NonSquareGraph, StartNodeOutOfBounds

logger = logging.getLogger(__name__)


def validate(D: Sequence[Sequence[int]], start: int) -> int:
    """Check the matrix shape, the edge costs and the start index.

    Returns the node count. Costs must be integers no smaller than MIN_EDGE;
    anything at or above NO_EDGE is an absent edge.
    """
    ncity = len(D)
    if ncity == 0:
        raise EmptyGraph()
    for row in D:
        if len(row) != ncity:
            raise NonSquareGraph(rows=ncity, cols=len(row))
    for i, row in enumerate(D):
        for j, x in enumerate(row):
            if not isinstance(x, Integral) or x < MIN_EDGE:
                raise InvalidEdgeCost(row=i, col=j, value=x)
    if not 0 <= start < ncity:
        raise StartNodeOutOfBounds(num_nodes=ncity, start=start)
    return ncity


def translate(cost: int, tour: List[int], ncity: int, start: int) -> Tuple[int, List[int]]:
    """Turn the engine's raw answer into a result, failing closed.

    Either an infinite cost or a structurally wrong tour is reported as
    NoPathFound, whatever the other signal says.
    """
    if cost >= INFINITY:
        raise NoPathFound()
    if ncity == 1:
        if list(tour) != [start, start]:
            raise NoPathFound()
    elif len(tour) != ncity + 1 or tour[0] != start or tour[-1] != start:
        raise NoPathFound()
    return int(cost), [int(v) for v in tour]


def solve_tsp(D: Sequence[Sequence[int]], start: int = 0, verbose: bool = False) -> Tuple[int, List[int]]:
    """Minimum-cost Hamiltonian cycle through ``start``.

    Returns ``(cost, tour)`` where ``tour`` starts and ends at ``start``.
    Raises a TSPError subclass for malformed input or when no tour exists.
    """
    ncity = validate(D, start)
    logger.debug("Solving %d-node instance from node %d.", ncity, start)
    cost, tour = TSP_DP(ncity, D, start, verbose=verbose).solve()
    return translate(cost, tour, ncity, start)
