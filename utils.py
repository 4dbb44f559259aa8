import logging

import numpy as np
import matplotlib.pyplot as plt
from scipy.spatial.distance import cdist
from geopy.distance import geodesic


def _is_number(token):
    try:
        float(token)
    except ValueError:
        return False
    return True


def _geo_degrees(x):
    # TSPLIB GEO coordinates are DDD.MM
    deg = int(x)
    return deg + 5.0 * (x - deg) / 3.0


def read(filename):
    """Read a TSPLIB instance as an integer distance matrix.

    Returns (name, ncity, D, coord). coord maps 0-based node index to [x, y]
    and is empty when the file carries no coordinates.
    """
    name = None
    ncity = None
    coord = dict()
    weights = []
    _type = None
    _format = "FULL_MATRIX"
    section = None
    with open(filename, "r") as f:
        for line in f:
            tokens = line.split()
            if not tokens:
                continue
            # data lines stay in the current section; anything else ends it
            if section == "weights" and _is_number(tokens[0]):
                weights.extend(map(float, tokens))
                continue
            if section == "coords" and _is_number(tokens[0]):
                tokens = list(map(float, tokens))
                coord[int(tokens[0]) - 1] = tokens[1:]
                continue
            section = None
            line = line.rstrip()
            line = line.split(":")
            for l in range(len(line)):
                line[l] = line[l].replace(" ", "")
            if line[0] == "NAME":
                name = line[1]
            elif line[0] == "DIMENSION":
                ncity = int(line[1])
            elif line[0] == "EDGE_WEIGHT_TYPE":
                _type = line[1]
            elif line[0] == "EDGE_WEIGHT_FORMAT":
                _format = line[1]
            elif line[0] == "EDGE_WEIGHT_SECTION":
                section = "weights"
            elif line[0] in ("NODE_COORD_SECTION", "DISPLAY_DATA_SECTION"):
                section = "coords"
            elif line[0] == "EOF":
                break

    if weights:
        if _format != "FULL_MATRIX":
            raise NotImplementedError(f"EDGE_WEIGHT_FORMAT {_format} is not supported.")
        if ncity is None:
            raise ValueError(f"{filename}: DIMENSION is required for explicit edge weights.")
        if len(weights) != ncity * ncity:
            raise ValueError(f"{filename}: DIMENSION {ncity} needs {ncity * ncity} edge weights, found {len(weights)}.")
        D = np.asarray(weights).reshape(ncity, ncity)
    elif coord:
        XY = np.array([coord[i] for i in sorted(coord)])
        if _type == "GEO":
            latlon = [(_geo_degrees(x), _geo_degrees(y)) for x, y in XY]
            D = [[geodesic(u, v).km for v in latlon] for u in latlon]
        else:
            D = cdist(XY, XY)
        if ncity is None:
            ncity = len(XY)
    else:
        raise ValueError(f"{filename}: no EDGE_WEIGHT_SECTION or NODE_COORD_SECTION found.")
    return name, ncity, np.rint(D).astype(np.int64), coord


def plot(tour, coord, figname="./tmp.png"):
    fig = plt.figure()
    x = [coord[i][0] for i in tour]
    y = [coord[i][1] for i in tour]
    plt.plot(x, y, "-o")
    plt.plot(x[:1], y[:1], "s", color="red")
    if figname:
        plt.savefig(figname)
    else:
        plt.show()
    plt.close(fig)


def calc_dist(tour, D):
    """Cost of a closed tour given as [start, ..., start]."""
    return sum(int(D[i][j]) for i, j in zip(tour, tour[1:]))


def make_logger(name=None, level=logging.INFO):
    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(level)
        return logger
    logger.setLevel(level)
    ch = logging.StreamHandler()
    ch.setLevel(level)
    fmt = logging.Formatter("[%(asctime)s][%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
