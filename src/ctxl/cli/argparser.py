"""Command-line argument parsing for ctxl.

This module defines the command-line interface for ctxl,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from ctxl import __version__
from ctxl.output_strategies import OUTPUT_FORMATS
from ctxl.presets.store import DEFAULT_PRESET_FILE


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with ctxl's options.
    """
    description = """
    ctxl: bundle a project's files, directory tree and a task into one LLM prompt.

    ctxl walks a project directory, keeps the files selected by presets for common
    project types, .gitignore rules and ad-hoc filters, and writes an XML document
    containing the contents of those files, the directory structure and a task
    description for a Large Language Model.

    When no preset is given, the project types present in the directory are
    detected from file names and extensions.
    """

    epilog = f"""
    Examples:
      # Detect project types and write the context to stdout
      ctxl /path/to/project

      # Use specific presets and save to a file
      ctxl /path/to/project -p python docker -o context.xml

      # Add include patterns and exclusions (prefix with !)
      ctxl /path/to/project -f "*.sql !migrations !*.lock"

      # Give the model a specific task
      ctxl /path/to/project --task "Find the bug in the login flow."

      # Include dotfiles and use a different ignore file
      ctxl /path/to/project -d --gitignore .dockerignore

      # Show the effective presets, or write the built-ins to {DEFAULT_PRESET_FILE} for editing
      ctxl --view-presets
      ctxl --save-presets

      # Print a summary with token counts to stderr
      ctxl /path/to/project -s stderr -t gpt-4
    """

    parser = argparse.ArgumentParser(
        prog="ctxl",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"ctxl {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The project directory to process (default: current directory). Paths in the output are relative to it.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-p",
        "--presets",
        nargs="+",
        metavar="PRESET",
        default=[],
        help="Presets to apply (e.g. python javascript). If omitted, project types are detected.",
    )
    parser.add_argument(
        "-f",
        "--filter",
        metavar="PATTERNS",
        default="",
        help=(
            "Whitespace-separated gitignore-style patterns. Patterns starting with ! are excluded, "
            "all others are included, e.g. \"*.sql !tests\"."
        ),
    )
    task_group = parser.add_mutually_exclusive_group()
    task_group.add_argument("--task", help="Task description for the model (default: describe the project).")
    task_group.add_argument("--task-file", type=Path, metavar="FILE", help="Read the task description from a file.")
    parser.add_argument(
        "--gitignore",
        type=Path,
        metavar="FILE",
        help="Ignore file with patterns to exclude (default: .gitignore in the project directory).",
    )
    parser.add_argument(
        "-d",
        "--include-dotfiles",
        action="store_true",
        help="Include files and directories whose names start with a dot.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="xml",
        help="Output format (default: xml).",
    )
    parser.add_argument(
        "--no-auto-detect",
        action="store_true",
        help="Do not detect presets when none are given; only the filter and default exclusions apply.",
    )
    parser.add_argument(
        "--preset-file",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_PRESET_FILE),
        help=f"YAML file with user presets overriding the built-ins (default: {DEFAULT_PRESET_FILE}).",
    )
    parser.add_argument(
        "--view-presets",
        action="store_true",
        help="Print the effective presets as YAML and exit.",
    )
    parser.add_argument(
        "--save-presets",
        action="store_true",
        help="Write the built-in presets to the preset file for editing and exit.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary report. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Tokenizer model to use for counting tokens (e.g., gpt-4). Specifying this enables token counting.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="ignore",
        help="How to handle directories that cannot be read (default: ignore).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output on stderr (-v for progress, -vv for every filter decision).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.view_presets and args.save_presets:
        raise ValueError("--view-presets and --save-presets cannot be combined")
