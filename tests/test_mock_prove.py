"""Tests for the mock_prove command line entry point."""

import json
import logging

import pytest

from mock_prove import build_parser, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.n == 6
    assert args.expected is None
    assert not args.fail_fast


def test_accepts(capsys) -> None:
    assert main(['--n', '6']) == 0
    out = capsys.readouterr().out
    assert "computed output: 720" in out
    assert "accepted" in out


def test_rejects_wrong_expected(capsys) -> None:
    assert main(['--n', '6', '--expected', '721', '--fail-fast']) == 1
    out = capsys.readouterr().out
    assert "rejected (1 violation(s))" in out
    assert "720 != 721" in out


def test_too_few_rows() -> None:
    assert main(['--n', '1']) == 2


def test_config_file(tmp_path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"num_advice": 1}))
    assert main(['--config', str(config)]) == 2


def test_export(tmp_path) -> None:
    path = tmp_path / "factorial.json"
    assert main(['--n', '5', '--export', str(path), '--log-level', 'DEBUG']) == 0
    with open(path) as f:
        assert json.load(f)["table"]["advice"]["col_a"][-1] == 120


def test_unknown_circuit_name(tmp_path, capsys) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"name": "Fibonacci"}))
    assert main(['--config', str(config)]) == 2
    assert "Fibonacci" in capsys.readouterr().err


def test_output_row_on_seed_slot(tmp_path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"output_row": 0}))
    assert main(['--config', str(config)]) == 2
