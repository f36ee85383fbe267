#!/usr/bin/env python3
"""Tests for the demo call sites, the benchmark and the command line.

Run with ``python test_cli.py`` or via ``pytest``.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from funcpipe.bench import run_benchmark
from funcpipe.cli.main import app
from funcpipe.config.loaders import load_config_file
from funcpipe.core.results import Success, Failure, StepFailedError
from funcpipe.demo import (
    power_plus_one, power_plus_one_direct, power_plus_one_handling_error, power_plus_one_many,
)

runner = CliRunner()


# ---------------------------------------------------------------------------
# Demo and benchmark
# ---------------------------------------------------------------------------

def test_hand_written_composition():
    assert power_plus_one_direct(5) == 26
    assert power_plus_one_handling_error(5) == Success(26)

    outcome = power_plus_one_handling_error(-3)
    assert isinstance(outcome, Failure)
    assert str(outcome.failure()) == "x should not be negative"


def test_pipeline_composition():
    assert power_plus_one(5) == Success(26)

    outcome = power_plus_one(-3)
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.failure(), StepFailedError)
    assert str(outcome.failure()) == "1st func failed: x should not be negative"


def test_pipeline_composition_over_many_values():
    assert power_plus_one_many([1, 2, 5]) == Success([2, 5, 26])
    assert power_plus_one_many([]) == Success([])

    outcome = power_plus_one_many([2, -1, -4])
    assert isinstance(outcome, Failure)
    assert str(outcome.failure()) == "1st func failed: x should not be negative"


def test_benchmark():
    results = run_benchmark(20, value=7)

    assert [result.name for result in results] == ["PowerPlusOneDirect", "PowerPlusOnePipe"]
    assert all(result.iterations == 20 for result in results)
    assert all(result.ns_per_op > 0 for result in results)

    with pytest.raises(ValueError):
        run_benchmark(0)


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

def test_demo_command():
    result = runner.invoke(app, ["demo"])

    assert result.exit_code == 0
    assert result.output.count("POWER+1: 26") == 3


def test_demo_command_reports_error():
    result = runner.invoke(app, ["demo", "--value=-3"])

    assert result.exit_code == 1
    assert "1st func failed: x should not be negative" in result.output


def test_bench_command():
    result = runner.invoke(app, ["bench", "--iterations", "50", "--value", "3"])

    assert result.exit_code == 0
    assert "PowerPlusOneDirect" in result.output
    assert "PowerPlusOnePipe" in result.output


def test_bench_command_rejects_zero_iterations():
    result = runner.invoke(app, ["bench", "--iterations", "0"])

    assert result.exit_code == 1
    assert "iterations must be positive" in result.output


def test_config_command_saves_file(tmp_path):
    target = tmp_path / "funcpipe.yaml"
    result = runner.invoke(app, ["config", "--output", str(target)])

    assert result.exit_code == 0
    assert set(load_config_file(target)) == {"log", "execution", "bench"}


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["demo", "--config", str(tmp_path / "absent.yaml")])

    assert result.exit_code == 1
    assert "Failed to load config file" in result.output


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
