"""Command-line interface for dir2context.

This module provides the command-line entry point. It parses arguments, configures
diagnostics on stderr, runs the analysis and writes the rendered document to stdout
in one piece once the traversal has completed.

Exit Codes:
    0: Successful completion
    1: Fatal error (root directory unusable, malformed exclude pattern)
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Basic usage to process a directory
    $ dir2context -d /path/to/dir

    # XML output with extra exclusions
    $ dir2context -d /path/to/dir -f xml -x "*.lock" "dist/"
"""

import logging
import os
import sys
from typing import Optional, Sequence

from dir2context.cli.argparser import create_parser
from dir2context.dir2context import Dir2Context
from dir2context.exceptions import Dir2ContextError

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: int) -> None:
    """Send dir2context diagnostics to stderr at the given level.

    Replaces any handler installed by a previous call, so repeated invocations in one
    process do not duplicate messages.
    """
    package_logger = logging.getLogger("dir2context")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def write_output(output: str) -> None:
    """Write the rendered document to stdout.

    Raises:
        BrokenPipeError: If the reader of stdout went away.
    """
    sys.stdout.write(output)
    sys.stdout.flush()


def silence_stdout() -> None:
    """Redirect stdout to the null device after a broken pipe.

    Prevents the interpreter from reporting a second error while flushing stdout at
    shutdown.
    """
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        # stdout has no usable descriptor (e.g. replaced in tests)
        pass


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the dir2context command-line interface.

    Args:
        argv: Arguments to parse instead of sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: Fatal error
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args(argv)

    if args.quiet:
        configure_logging(logging.WARNING)
    elif args.verbose:
        configure_logging(logging.DEBUG)
    else:
        configure_logging(logging.INFO)

    try:
        analyzer = Dir2Context(
            args.directory,
            output_format=args.format,
            max_depth=args.max_depth,
            exclude_patterns=args.exclude,
            respect_gitignore=args.respect_gitignore,
        )
        output = analyzer.render()
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(130)
    except (Dir2ContextError, ValueError, LookupError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    try:
        write_output(output)
    except BrokenPipeError:
        silence_stdout()
        sys.exit(141)


if __name__ == "__main__":
    main()
