"""
Command line entrypoint.

This script:
- Reads one arithmetic expression from the command line or standard input
- Prints the parsed expression tree
- Prints the tree again after every evaluation step, down to the result

Exit status is 0 on success and 1 when the expression cannot be evaluated.
"""
import argparse
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, Field, ValidationError

from stepwise_calculator.calculator import StepwiseCalculator
from stepwise_calculator.common.errors import CalculatorError, InputUnreadableError
from stepwise_calculator.common.logger import configure_logging, logger
from stepwise_calculator.common.settings import CalculatorSettings, LogLevel

PROMPT = "\nEnter your mathematical expression:\n  -> "


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : Optional[str]
        Expression to evaluate; read from standard input when missing.
    precision : int
        Decimals printed for non-integral results.
    log_level : LogLevel
        Verbosity of the package logger.
    """

    expression: Optional[str] = None
    precision: int = Field(default=15, ge=0, le=30)
    log_level: LogLevel = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments without the program name, sys.argv[1:] when None

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Evaluate an arithmetic expression step by step"
    )

    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate, e.g. \"3 * (5 - 2)\"; read from standard input when omitted",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=15,
        help="Decimals printed for non-integral results (default: 15)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            expression=args.expression,
            precision=args.precision,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def read_expression(stream: Optional[TextIO] = None, prompt: bool = False) -> str:
    """
    Read one line holding the expression.

    :param stream: Input stream, sys.stdin when None
    :param bool prompt: Print a prompt before reading

    :return: The line without surrounding whitespace
    :rtype: str
    :raises InputUnreadableError: If nothing can be read
    """
    stream = sys.stdin if stream is None else stream
    if prompt:
        print(PROMPT, end="", flush=True)

    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputUnreadableError() from exc

    if not line:
        raise InputUnreadableError()
    return line.strip()


def describe_error(exc: Exception) -> str:
    """Return a one-line diagnostic for a calculator or validation error."""
    if isinstance(exc, ValidationError):
        return "; ".join(error["msg"] for error in exc.errors())
    return str(exc)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Evaluate one expression and print every step.

    :param argv: Arguments without the program name, sys.argv[1:] when None

    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    settings = CalculatorSettings(precision=cli_args.precision, log_level=cli_args.log_level)
    calculator = StepwiseCalculator(settings=settings)

    try:
        expression = cli_args.expression
        if expression is None:
            expression = read_expression(prompt=sys.stdin.isatty())

        for index, rendered in enumerate(calculator.trace(expression)):
            print(rendered if index == 0 else f"= {rendered}")

    except (CalculatorError, ValidationError) as exc:
        logger.debug(f"❌ Evaluation failed: {exc!r}")
        print(f"Error: {describe_error(exc)}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Console script entrypoint."""
    sys.exit(main())


if __name__ == "__main__":
    run()
