import pytest

from tsp_dp import NO_EDGE

EXPLICIT = """NAME: tiny3
TYPE: ATSP
COMMENT: directed three node instance
DIMENSION: 3
EDGE_WEIGHT_TYPE: EXPLICIT
EDGE_WEIGHT_FORMAT: FULL_MATRIX
EDGE_WEIGHT_SECTION
 0 10 40
 12 0 15
 25 18 0
EOF
"""

EUC = """NAME : rect4
TYPE : TSP
DIMENSION : 4
EDGE_WEIGHT_TYPE : EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 0
3 3 4
4 0 4
EOF
"""


@pytest.fixture
def square4():
    return [[0, 10, 15, 20],
            [10, 0, 35, 25],
            [15, 35, 0, 30],
            [20, 25, 30, 0]]


@pytest.fixture
def directed3():
    return [[0, 10, 40],
            [12, 0, 15],
            [25, 18, 0]]


@pytest.fixture
def disconnected3():
    return [[0, 1, NO_EDGE],
            [1, 0, 1],
            [NO_EDGE, 1, 0]]


@pytest.fixture
def tsplib(tmp_path):
    def write(text, name="instance.tsp"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return write


@pytest.fixture
def explicit_tsp(tsplib):
    return tsplib(EXPLICIT, "tiny3.tsp")


@pytest.fixture
def euc_tsp(tsplib):
    return tsplib(EUC, "rect4.tsp")
