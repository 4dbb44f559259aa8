class TSPError(Exception):
    """Base class of every failure reported by solve_tsp."""
    def _fields(self):
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._fields() == other._fields()

    def __hash__(self):
        return hash((type(self), self._fields()))


class EmptyGraph(TSPError):
    def __init__(self) -> None:
        super().__init__("Graph must not be empty.")


class NonSquareGraph(TSPError):
    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(f"Graph must be a square matrix. Got {rows} rows, {cols} columns.")
        self.rows = rows
        self.cols = cols

    def _fields(self):
        return (self.rows, self.cols)


class StartNodeOutOfBounds(TSPError):
    def __init__(self, num_nodes: int, start: int) -> None:
        super().__init__(f"Start node {start} is out of bounds. Number of nodes: {num_nodes}.")
        self.num_nodes = num_nodes
        self.start = start

    def _fields(self):
        return (self.num_nodes, self.start)


class InvalidEdgeCost(TSPError):
    def __init__(self, row: int, col: int, value) -> None:
        super().__init__(f"Edge ({row}, {col}) has invalid cost {value!r}: costs must be integers no smaller than -(2**30 - 1).")
        self.row = row
        self.col = col
        self.value = value

    def _fields(self):
        return (self.row, self.col, self.value)


class NoPathFound(TSPError):
    def __init__(self) -> None:
        super().__init__("No valid TSP tour was found.")


class InternalSolverError(TSPError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Internal solver error: {message}")
        self.message = message

    def _fields(self):
        return (self.message,)
