"""Test the command line entrypoint."""
import io
import logging
import sys

import pytest

from stepwise_calculator.common.errors import InputUnreadableError
from stepwise_calculator.common.logger import LOGGER_NAME, configure_logging, get_logger
from stepwise_calculator.main import main, parse_args, read_expression


def test_main_prints_every_step(capsys) -> None:
    assert main(["3 * (5 - 2)"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["(3 * (5 - 2))", "= (3 * 3)", "= 9"]


def test_main_reads_stdin(capsys, monkeypatch) -> None:
    """Without an argument the expression is read from standard input."""
    monkeypatch.setattr(sys, "stdin", io.StringIO("2^3^2\n"))
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["(2 ^ (3 ^ 2))", "= (2 ^ 9)", "= 512"]


@pytest.mark.parametrize("expr,message", [
    ("(1+2", "Unmatched parenthesis"),
    ("1 2", "Invalid expression"),
    ("tanh(1)", "'tanh' is not a function"),
    ("   ", "Expression cannot be empty"),
])
def test_main_reports_errors(capsys, expr, message) -> None:
    """Fatal errors print a diagnostic, no result, and exit with status 1."""
    assert main([expr]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert message in captured.err
    assert captured.err.startswith("Error: ")


def test_main_unreadable_input(capsys, monkeypatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main([]) == 1
    assert "Can't read your input!" in capsys.readouterr().err


def test_main_precision_option(capsys) -> None:
    assert main(["1/3", "--precision", "4"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "= 0.3333"


def test_parse_args() -> None:
    args = parse_args(["1 + 1", "--log-level", "debug"])
    assert args.expression == "1 + 1"
    assert args.precision == 15
    assert args.log_level == "DEBUG"


def test_parse_args_invalid_precision() -> None:
    """Values rejected by the pydantic model end in an argparse error."""
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["1", "--precision", "99"])
    assert exc_info.value.code == 2


def test_read_expression_strips_newline() -> None:
    assert read_expression(io.StringIO("  1 + 2 \n")) == "1 + 2"


def test_read_expression_prompt(capsys) -> None:
    read_expression(io.StringIO("1\n"), prompt=True)
    assert "Enter your mathematical expression:" in capsys.readouterr().out


def test_read_expression_eof() -> None:
    with pytest.raises(InputUnreadableError):
        read_expression(io.StringIO(""))


def test_logger_has_single_handler() -> None:
    """Getting the logger again does not add handlers."""
    log = get_logger()
    assert get_logger() is log
    assert log.name == LOGGER_NAME
    assert len(log.handlers) == 1


def test_configure_logging() -> None:
    log = get_logger()
    previous = log.level
    try:
        configure_logging("debug")
        assert log.level == logging.DEBUG
    finally:
        log.setLevel(previous)
