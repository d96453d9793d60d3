#!/usr/bin/env python3
"""
Command-line interface for timed operations.

Runs a command as a child process and writes one timing event for it.
"""

import argparse
import logging
import shlex
import subprocess
import sys
from datetime import timedelta

from timed_operations.config import OperationOptions
from timed_operations.core import begin_operation
from timed_operations.templates import MessageTemplate

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Running {Command}"
EXIT_NOT_STARTED = 127
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parses command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: The parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="timed-operations",
        description="Run a command and log its outcome and duration as a single event",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Time a backup script
  %(prog)s -- ./backup.sh --full

  # Custom message and levels
  %(prog)s -m "Nightly import" --level debug --abandoned-level error -- make import

  # Warn when the build takes longer than 90 seconds
  %(prog)s --warning-threshold-ms 90000 -- make build

Levels can also be set with TIMED_OPERATIONS_COMPLETION_LEVEL,
TIMED_OPERATIONS_ABANDONMENT_LEVEL and TIMED_OPERATIONS_WARNING_THRESHOLD_MS.
""",
    )
    parser.add_argument(
        "-m",
        "--message",
        help=(
            "Message template for the event. Defaults to 'Running {Command}'. "
            "It may hold one placeholder, which receives the command line."
        ),
    )
    parser.add_argument("--level", help="Level of the event when the command succeeds")
    parser.add_argument(
        "--abandoned-level",
        dest="abandoned_level",
        help="Level of the event when the command fails",
    )
    parser.add_argument(
        "--warning-threshold-ms",
        dest="warning_threshold_ms",
        type=float,
        help="Log at WARNING or above when the command runs longer than this",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run, after '--'")

    args = parser.parse_args(argv)
    if args.command and args.command[0] == "--":
        args.command = args.command[1:]
    if not args.command:
        parser.error("a command to run is required")
    if args.message is not None and len(MessageTemplate(args.message).placeholders) > 1:
        parser.error("--message may hold at most one placeholder")
    return args


def configure_logging(verbose: bool) -> None:
    """
    Configures the logging settings based on the verbosity level.

    Args:
        verbose: If True, enable DEBUG logging; otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )


def build_options(args: argparse.Namespace) -> OperationOptions:
    """
    Combine environment settings with command-line flags; flags win.

    Raises:
        ValueError: If a level or the threshold is invalid.
    """
    threshold = None
    if args.warning_threshold_ms is not None:
        threshold = timedelta(milliseconds=args.warning_threshold_ms)

    return OperationOptions.from_env(
        completion_level=args.level,
        abandonment_level=args.abandoned_level,
        warning_threshold=threshold,
    )


def run_command(command: list[str], options: OperationOptions, message: str | None = None) -> int:
    """
    Run ``command`` inside an operation.

    A placeholder in ``message`` receives the command line.

    Returns:
        int: The command's exit code, 127 if it could not be started, 130 if interrupted.
    """
    template = message or DEFAULT_MESSAGE
    template_args = ()
    if MessageTemplate(template).placeholders:
        template_args = (shlex.join(command),)

    with begin_operation(logger, template, *template_args, options=options) as op:
        try:
            completed = subprocess.run(command, check=False)
        except OSError as e:
            op.set_exception(e).abandon(str(e))
            return EXIT_NOT_STARTED
        except KeyboardInterrupt:
            op.abandon("interrupted")
            return EXIT_INTERRUPTED

        if completed.returncode == 0:
            op.complete(completed.returncode, "ExitCode")
            return 0

        op.abandon(completed.returncode, "ExitCode")

    # Negative codes mean the child was killed by a signal
    if completed.returncode < 0:
        return 128 - completed.returncode
    return completed.returncode


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        int: Exit code of the timed command, or 1 for configuration errors.
    """
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        options = build_options(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    try:
        return run_command(args.command, options, args.message)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
