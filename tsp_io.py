"""Line-oriented text format.

    N
    d_00 d_01 ... d_0(N-1)
    ...
    d_(N-1)0 ... d_(N-1)(N-1)
    start
"""
from typing import Iterable, List, Tuple


class InputError(ValueError):
    pass


def _next_line(lines, what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise InputError(f"Failed to read {what}.") from None


def read_instance(lines: Iterable[str]) -> Tuple[List[List[int]], int]:
    lines = iter(lines)

    line = _next_line(lines, "the number of nodes (N)")
    try:
        ncity = int(line.strip())
    except ValueError:
        raise InputError("Invalid N (must be an integer).") from None
    if ncity <= 0:
        raise InputError("The number of nodes (N) must be greater than 0.")

    D = []
    for i in range(1, ncity + 1):
        line = _next_line(lines, f"matrix row {i}")
        try:
            row = [int(x) for x in line.split()]
        except ValueError:
            raise InputError(f"Matrix row {i} contains a non-numeric value.") from None
        if len(row) != ncity:
            raise InputError(f"Matrix row {i} does not have {ncity} numbers (found {len(row)}).")
        D.append(row)

    line = _next_line(lines, "the start node")
    try:
        start = int(line.strip())
    except ValueError:
        raise InputError("Invalid start node (must be an integer).") from None
    if not 0 <= start < ncity:
        raise InputError(f"Start node out of bounds (must be between 0 and {ncity - 1}).")
    return D, start


def format_tour(tour: Iterable[int]) -> str:
    return " -> ".join(str(v) for v in tour)


def format_result(cost: int, tour: Iterable[int]) -> List[str]:
    return [f"Total cost: {cost}", format_tour(tour)]
