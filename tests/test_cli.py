"""End-to-end tests of the command line tool."""
import json
import logging

import networkx as nx
import pytest

from netctrl import __version__
from netctrl.cli import main


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Runs every test in an empty repository without a config.json."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    logger = logging.getLogger("netctrl")
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestTextModes:
    def test_driver_nodes(self, capsys, edge_list_file):
        code, out, err = run(capsys, str(edge_list_file))
        assert code == 0
        assert out == "0\n"
        assert "[INFO]" in err

    def test_driver_nodes_by_name(self, capsys, tmp_path):
        path = tmp_path / "net.ncol"
        path.write_text("a b\na c\n")
        code, out, _ = run(capsys, str(path))
        assert code == 0
        assert out.split() == ["a", "c"] or out.split() == ["a", "b"]

    def test_control_paths(self, capsys, edge_list_file):
        code, out, _ = run(capsys, "-M", "control_paths", str(edge_list_file))
        assert code == 0
        assert out == "Stem: 0 1 2 3\n"

    def test_statistics(self, capsys, edge_list_file):
        code, out, _ = run(capsys, "-M", "statistics", str(edge_list_file))
        assert code == 0
        assert out.splitlines() == ["1 0 0 0 3", "0.25 0 0 0 1"]

    def test_switchboard_statistics(self, capsys, cycle_file):
        code, out, _ = run(capsys, "-m", "switchboard", "-M", "statistics",
                           str(cycle_file))
        assert code == 0
        assert out.splitlines() == ["1 0 3 0 0", "0.333333 0 1 0 0"]

    def test_targeted_statistics_warns(self, capsys, edge_list_file):
        code, out, err = run(capsys, "-M", "statistics", "-T", "3",
                             str(edge_list_file))
        assert code == 0
        assert out.splitlines()[0] == "1 0 0 0 0"
        assert "[WARN]" in err

    def test_significance(self, capsys, edge_list_file):
        code, out, _ = run(capsys, "-M", "significance", "--trials", "2",
                           "--seed", "3", str(edge_list_file))
        assert code == 0
        lines = out.splitlines()
        assert len(lines) == 4
        assert lines[0] == "Observed\t0.25"

    def test_output_file(self, capsys, tmp_path, edge_list_file):
        target = tmp_path / "drivers.txt"
        code, out, _ = run(capsys, "-o", str(target), str(edge_list_file))
        assert code == 0
        assert out == ""
        assert target.read_text() == "0\n"

    def test_quiet(self, capsys, edge_list_file):
        _, _, err = run(capsys, "-q", str(edge_list_file))
        assert err == ""

    def test_config_file_sets_defaults(self, capsys, workdir, edge_list_file):
        (workdir / "config.json").write_text(json.dumps({"mode": "control_paths"}))
        code, out, _ = run(capsys, str(edge_list_file))
        assert code == 0
        assert out.startswith("Stem:")

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestFileModes:
    def test_graph(self, capsys, tmp_path, edge_list_file):
        target = tmp_path / "annotated.graphml"
        code, _, _ = run(capsys, "-M", "graph", "-o", str(target), str(edge_list_file))
        assert code == 0
        g = nx.read_graphml(target)
        assert g.nodes["0"]["is_driver"] is True
        assert g.nodes["3"]["is_driver"] is False
        edge_classes = {data["edge_class"] for _, _, data in g.edges(data=True)}
        assert edge_classes == {"critical"}
        path_types = {data["path_type"] for _, _, data in g.edges(data=True)}
        assert path_types == {"stem"}

    def test_graph_as_edgelist(self, capsys, tmp_path, edge_list_file):
        target = tmp_path / "out.txt"
        code, _, _ = run(capsys, "-M", "graph", "-F", "edgelist", "-o", str(target),
                         str(edge_list_file))
        assert code == 0
        assert target.read_text() == "0\t1\n1\t2\n2\t3\n"

    def test_plot(self, capsys, tmp_path, cycle_file):
        target = tmp_path / "cycle.png"
        code, _, _ = run(capsys, "-M", "plot", "-o", str(target), str(cycle_file))
        assert code == 0
        assert target.exists()

    def test_plot_needs_output_file(self, capsys, cycle_file):
        code, _, err = run(capsys, "-M", "plot", str(cycle_file))
        assert code == 1
        assert "[ERROR]" in err


class TestErrors:
    def test_missing_input(self, capsys, tmp_path):
        code, _, err = run(capsys, str(tmp_path / "missing.txt"))
        assert code == 2
        assert "[ERROR]" in err

    def test_unknown_format(self, capsys, tmp_path):
        path = tmp_path / "net.xyz"
        path.write_text("0 1\n")
        code, _, _ = run(capsys, str(path))
        assert code == 2

    def test_bad_target_spec(self, capsys, edge_list_file):
        code, _, err = run(capsys, "-T", "nosuchnode", str(edge_list_file))
        assert code == 2
        assert "nosuchnode" in err

    def test_switchboard_rejects_targets(self, capsys, edge_list_file):
        code, _, _ = run(capsys, "-m", "switchboard", "-T", "3", str(edge_list_file))
        assert code == 2

    def test_invalid_model_in_config(self, capsys, workdir, edge_list_file):
        (workdir / "config.json").write_text(json.dumps({"model": "kalman"}))
        code, _, err = run(capsys, str(edge_list_file))
        assert code == 1
        assert "kalman" in err

    def test_unwritable_output(self, capsys, tmp_path, edge_list_file):
        target = tmp_path / "no" / "such" / "dir" / "out.txt"
        code, _, _ = run(capsys, "-o", str(target), str(edge_list_file))
        assert code == 3

    def test_unknown_option(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--no-such-option", "x.txt"])
        assert exc.value.code == 2
