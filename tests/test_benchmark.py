# tests/test_benchmark.py
import argparse
import importlib.util
from pathlib import Path

import pytest

from sudokugen.solver import make_rng

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "benchmark_generation.py"


@pytest.fixture(scope="module")
def benchmark():
    spec = importlib.util.spec_from_file_location("benchmark_generation", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_positive_int_accepts_counts(benchmark):
    assert benchmark.positive_int("3") == 3


@pytest.mark.parametrize("value", ["0", "-2"])
def test_positive_int_rejects_zero_and_negatives(benchmark, value):
    with pytest.raises(argparse.ArgumentTypeError):
        benchmark.positive_int(value)


def test_zero_runs_is_a_usage_error(benchmark, capsys):
    with pytest.raises(SystemExit) as exc:
        benchmark.main(["--runs", "0"])
    assert exc.value.code == 2
    assert "--runs" in capsys.readouterr().err


def test_run_tier_rejects_zero_runs(benchmark):
    with pytest.raises(ValueError):
        benchmark.run_tier("easy", 0, make_rng(0), 50)


def test_single_run_report(benchmark, capsys):
    benchmark.main(["--difficulty", "easy", "--runs", "1", "--seed", "5", "--max-attempts", "0"])
    out = capsys.readouterr().out
    assert out.startswith("   easy: target=48")
    assert "cap hit 100%" in out
