import io
import logging

import pytest

import main


@pytest.fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return feed


def test_stdin_success(stdin, capsys):
    stdin("3\n0 10 40\n12 0 15\n25 18 0\n0\n")
    assert main.main([]) == 0
    assert capsys.readouterr().out == "Input\nOutput\nTotal cost: 50\n0 -> 1 -> 2 -> 0\n"


def test_stdin_single_node(stdin, capsys):
    stdin("1\n0\n0\n")
    assert main.main([]) == 0
    assert capsys.readouterr().out == "Input\nOutput\nTotal cost: 0\n0 -> 0\n"


def test_stdin_no_tour(stdin, capsys, caplog):
    stdin("3\n0 1 1073741823\n1 0 1\n1073741823 1 0\n0\n")
    with caplog.at_level(logging.ERROR):
        assert main.main([]) == 1
    assert capsys.readouterr().out == "Input\nOutput\n"
    assert "No valid TSP tour" in caplog.text


def test_stdin_malformed(stdin, capsys, caplog):
    stdin("2\n0 1\n1 x\n0\n")
    with caplog.at_level(logging.ERROR):
        assert main.main([]) == 1
    assert capsys.readouterr().out == "Input\n"
    assert "row 2 contains a non-numeric" in caplog.text


def test_tsplib_explicit(explicit_tsp, capsys):
    assert main.main(["-f", explicit_tsp]) == 0
    assert capsys.readouterr().out == "Total cost: 50\n0 -> 1 -> 2 -> 0\n"


def test_tsplib_start_out_of_bounds(explicit_tsp, caplog):
    with caplog.at_level(logging.ERROR):
        assert main.main(["-f", explicit_tsp, "--start", "3"]) == 1
    assert "out of bounds" in caplog.text


def test_tsplib_plot(euc_tsp, tmp_path, capsys):
    figname = tmp_path / "rect4.png"
    assert main.main(["-f", euc_tsp, "--start", "2", "--plot", str(figname)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Total cost: 14"
    assert out[1].startswith("2 -> ") and out[1].endswith(" -> 2")
    assert figname.exists()


def test_plot_without_coordinates(explicit_tsp, tmp_path, caplog):
    figname = tmp_path / "none.png"
    with caplog.at_level(logging.WARNING):
        assert main.main(["-f", explicit_tsp, "--plot", str(figname)]) == 0
    assert not figname.exists()
    assert "nothing to plot" in caplog.text


def test_stdin_absent_edge_beyond_int64(stdin, capsys):
    stdin("3\n0 100000000000000000000 1\n1 0 1\n1 1 0\n0\n")
    assert main.main([]) == 0
    assert capsys.readouterr().out == "Input\nOutput\nTotal cost: 3\n0 -> 2 -> 1 -> 0\n"


def test_tsplib_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main.main(["-f", str(tmp_path / "missing.tsp")]) == 1
    assert "missing.tsp" in caplog.text


def test_tsplib_dimension_mismatch(tsplib, caplog):
    path = tsplib("NAME: bad\nDIMENSION: 3\nEDGE_WEIGHT_SECTION\n0 1\n1 0\nEOF\n")
    with caplog.at_level(logging.ERROR):
        assert main.main(["-f", path]) == 1
    assert "needs 9 edge weights, found 4" in caplog.text


def test_tsplib_cost_cross_check(explicit_tsp, monkeypatch, capsys, caplog):
    monkeypatch.setattr(main, "solve_tsp", lambda D, start, verbose=False: (1, [0, 1, 2, 0]))
    with caplog.at_level(logging.ERROR):
        assert main.main(["-f", explicit_tsp]) == 1
    assert capsys.readouterr().out == ""
    assert "does not match the tour cost 50" in caplog.text
