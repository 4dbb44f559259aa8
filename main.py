import sys
import logging
from argparse import ArgumentParser

from tsp_errors import InternalSolverError, TSPError
from tsp_io import read_instance, format_result
from tsp_solver import solve_tsp
from utils import read, plot, calc_dist, make_logger

logger = logging.getLogger(__name__)


def argparser():
    parser = ArgumentParser(description="Exact TSP on a small distance matrix (Held-Karp).")
    parser.add_argument("-f", default=None, help="TSPLIB file; the line format is read from stdin otherwise")
    parser.add_argument("--start", type=int, default=0, help="Start node for a TSPLIB instance")
    parser.add_argument("--plot", default=None, help="Save the tour plot here (coordinate instances only)")
    parser.add_argument("-v", "--verbose", default=False, action="store_true", help="Debug logging and progress bar")
    return parser


def run_stdin(stream, verbose=False):
    print("Input")
    D, start = read_instance(stream)
    print("Output")
    cost, tour = solve_tsp(D, start, verbose=verbose)
    for line in format_result(cost, tour):
        print(line)
    return cost, tour


def run_tsplib(filename, start=0, figname=None, verbose=False):
    name, ncity, D, coord = read(filename)
    logger.info("%s: %d nodes", name, ncity)
    cost, tour = solve_tsp(D, start, verbose=verbose)
    total_dist = calc_dist(tour, D)
    if total_dist != cost:
        raise InternalSolverError(f"reported cost {cost} does not match the tour cost {total_dist}")
    for line in format_result(cost, tour):
        print(line)
    if figname:
        if coord:
            plot(tour, coord, figname=figname)
        else:
            logger.warning("%s has no coordinates; nothing to plot.", name)
    return cost, tour


def main(argv=None):
    args = argparser().parse_args(argv)
    make_logger(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        if args.f:
            run_tsplib(args.f, args.start, figname=args.plot, verbose=args.verbose)
        else:
            run_stdin(sys.stdin, verbose=args.verbose)
    except (OSError, ValueError, NotImplementedError, TSPError) as e:
        logger.error("Error: %s", e)
        return 1
    return 0


if __name__=="__main__":
    sys.exit(main())
