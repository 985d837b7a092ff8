"""Tests del CLI y del formato de reporte."""

import argparse
import json
from unittest.mock import MagicMock

import pytest

from jobs.materializer import cli
from jobs.materializer.benchmark import RunTiming
from jobs.materializer.report import format_report, format_run
from jobs.materializer.run_stats import aggregate


@pytest.fixture
def mock_runner():
    runner = MagicMock()
    runner.run = MagicMock(return_value=4)
    return runner


@pytest.fixture
def sqlite_env(tmp_path, monkeypatch):
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("MATERIALIZER_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    return db_path


def _scripted(answers):
    it = iter(answers)

    def _input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


# =============================================================================
# TEST 1: PARSER
# =============================================================================

class TestParser:

    def test_benchmark_requires_positive_iterations(self):
        parser = cli.build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["benchmark", "--iterations", "0"])
        with pytest.raises(SystemExit):
            parser.parse_args(["benchmark", "--iterations", "many"])

    def test_non_numeric_iterations_error_is_not_chained(self):
        with pytest.raises(argparse.ArgumentTypeError) as exc_info:
            cli._positive_int("many")
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True

    def test_benchmark_args(self):
        args = cli.build_parser().parse_args(["benchmark", "-n", "5", "--json"])
        assert args.command == "benchmark"
        assert args.iterations == 5
        assert args.json is True


# =============================================================================
# TEST 2: MENÚ INTERACTIVO
# =============================================================================

class TestMenu:

    def test_dispatches_run_and_benchmark(self, mock_runner):
        out = []
        cli.run_menu(
            mock_runner,
            MagicMock(),
            input_fn=_scripted(["1", "2", "abc", "-1", "2", "0"]),
            output=out.append,
        )

        text = "\n".join(out)
        assert mock_runner.run.call_count == 3
        assert "for 4 measurements" in text
        assert "Number of Iterations:\t\t2" in text

    def test_unknown_option_is_ignored(self, mock_runner):
        cli.run_menu(mock_runner, MagicMock(), input_fn=_scripted(["7", "x", "0"]), output=lambda s: None)
        mock_runner.run.assert_not_called()

    def test_eof_exits(self, mock_runner):
        cli.run_menu(mock_runner, MagicMock(), input_fn=_scripted([]), output=lambda s: None)
        mock_runner.run.assert_not_called()


# =============================================================================
# TEST 3: REPORTE
# =============================================================================

class TestReport:

    def test_format_run(self):
        assert format_run(RunTiming(record_count=12, elapsed_seconds=0.5)) == (
            "Time elapsed: 0.500000 seconds for 12 measurements"
        )

    def test_format_report_lists_both_orders(self):
        report = format_report(aggregate([2.0, 1.0], 2, record_count=3))

        assert "Datapoints processed each:\t3" in report
        assert "Fastest iteration (min):\t1.000000 seconds" in report
        assert "Slowest iteration (max):\t2.000000 seconds" in report
        lines = report.splitlines()
        assert lines[lines.index("All runs:") + 1] == "[1.000000 2.000000]"
        assert lines[lines.index("All runs (unsorted):") + 1] == "[2.000000 1.000000]"


# =============================================================================
# TEST 4: MAIN (SQLite)
# =============================================================================

class TestMain:

    def test_run_command(self, sqlite_env, capsys):
        assert cli.main(["--init-schema", "run"]) == 0

        out = capsys.readouterr().out
        assert "Connected with database!" in out
        assert "for 0 measurements" in out

    def test_benchmark_json(self, sqlite_env, capsys):
        assert cli.main(["--init-schema", "benchmark", "--iterations", "2", "--json"]) == 0

        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{"):])
        assert payload["iterations"] == 2
        assert payload["record_count"] == 0

    def test_missing_tables_exit_code(self, sqlite_env):
        assert cli.main(["run"]) == 1

    def test_invalid_port_setting_exit_code(self, sqlite_env, monkeypatch):
        monkeypatch.setenv("DB_PORT", "abc")

        assert cli.main(["run"]) == 1

    def test_unreachable_database_exit_code(self, sqlite_env, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'missing_dir' / 'x.db'}")

        assert cli.main(["run"]) == 1
        assert "Connected with database!" not in capsys.readouterr().out
