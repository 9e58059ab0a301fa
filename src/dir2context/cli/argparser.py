"""Command-line argument parsing for dir2context.

This module defines the command-line interface for dir2context,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from dir2context import __version__


def non_negative_int(value: str) -> int:
    """Argument type accepting integers greater than or equal to zero.

    Raises:
        argparse.ArgumentTypeError: If the value is not a non-negative integer.
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth value: '{value}' (expected a non-negative integer)")
    if number < 0:
        raise argparse.ArgumentTypeError(f"invalid depth value: '{value}' (must be 0 or greater)")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with dir2context's options.
    """
    description = """
    dir2context: Generates directory structure and file contents for LLM context.

    Processes a directory, creating a structure view (text tree or XML) and
    concatenating readable file contents. Uses gitignore-style patterns for
    exclusion and optionally respects .gitignore files. Defaults to the current
    directory if none is specified.

    Output is written to stdout once the whole directory has been processed.
    Warnings about skipped files and unreadable directories go to stderr.
    """

    epilog = """
    Examples:
      # Process the current directory
      dir2context

      # Produce XML for another directory
      dir2context -d /path/to/project -f xml

      # Limit traversal depth (0 means no limit)
      dir2context -m 2

      # Exclude files with gitignore-style patterns (applied after .gitignore rules)
      dir2context -x "*.log" "build/" -x "!important.log"

      # Ignore .gitignore files entirely
      dir2context --no-respect-gitignore

      # Only report warnings and errors on stderr
      dir2context -q > context.txt
    """

    parser = argparse.ArgumentParser(
        prog="dir2context",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2context {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        metavar="DIRECTORY",
        default=Path("."),
        help="The directory to process (default: current directory).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "xml", "markup"],
        default="text",
        help="Output format; 'markup' is an alias for 'xml' (default: text).",
    )
    parser.add_argument(
        "-m",
        "--max-depth",
        type=non_negative_int,
        metavar="DEPTH",
        default=0,
        help="Maximum depth to traverse (0 means no limit).",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="extend",
        nargs="+",
        metavar="PATTERN",
        default=[],
        help=(
            "Gitignore-style patterns to exclude files and directories. Applied after .gitignore rules; "
            "the last matching pattern wins, so '!pattern' re-includes. Can be specified multiple times."
        ),
    )
    parser.add_argument(
        "--respect-gitignore",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Respect .gitignore files found in the directory structure (default: enabled).",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors on stderr.",
    )
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also report every exclusion decision on stderr.",
    )

    return parser
