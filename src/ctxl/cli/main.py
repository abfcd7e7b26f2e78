"""Command-line interface for ctxl.

This module provides the command-line interface for ctxl, which bundles a
project's files, directory tree and a task description into one document for a
Large Language Model. It handles argument parsing, logging setup, preset
management commands, output writing and signal management for graceful
interruption handling.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including a malformed preset file)
    2: Command-line syntax error
    126: Permission denied (with -P fail)
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Detect project types and print the context
    $ ctxl /path/to/project

    # Save the context for a Python project with a custom task
    $ ctxl /path/to/project -p python -o context.xml --task "Review the error handling."
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any

from ctxl.cli.argparser import create_parser, validate_args
from ctxl.cli.safe_writer import SafeWriter
from ctxl.cli.signal_handler import setup_signal_handling, signal_handler
from ctxl.context_builder import DEFAULT_TASK, ProjectContext
from ctxl.exceptions import TokenizerNotAvailableError
from ctxl.presets.store import PresetStore
from ctxl.project_tree.permission_action import PermissionAction
from ctxl.token_counter import check_tiktoken_available

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int = 0) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr, force=True)


def format_counts(counts: Mapping[str, Any]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing various count metrics.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    result = [
        f"Presets: {counts['presets']}",
        f"Directories: {counts['directories']}",
        f"Files: {counts['files']}",
        f"Errors: {counts['errors']}",
        f"Lines: {counts['lines']}",
        f"Characters: {counts['characters']}",
    ]

    if counts["tokens"] is not None:
        result.insert(5, f"Tokens: {counts['tokens']}")

    return "\n".join(result)


def main() -> None:
    """Main entry point for the ctxl command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with 2 on argument errors and 0 for --version
        args = parser.parse_args()

        setup_logging(args.verbose)
        validate_args(args)

        store = PresetStore(args.preset_file)

        if args.save_presets:
            path = store.save_built_ins()
            print(f"Built-in presets saved to {path}", file=sys.stderr)
            return

        if args.view_presets:
            with SafeWriter(sys.stdout.fileno()) as safe_writer:
                try:
                    safe_writer.write(store.view_presets())
                except BrokenPipeError:
                    pass
            return

        if args.tokenizer and not check_tiktoken_available():
            raise TokenizerNotAvailableError(
                "Token counting was requested with -t/--tokenizer, but the required tiktoken library is not installed."
            )

        task = DEFAULT_TASK
        if args.task_file:
            task = args.task_file.read_text(encoding="utf-8")
        elif args.task is not None:
            task = args.task

        perm_action = {
            "ignore": PermissionAction.IGNORE,
            "warn": PermissionAction.RAISE,
            "fail": PermissionAction.RAISE,
        }[args.permission_action]

        try:
            context = ProjectContext(
                args.directory,
                presets=args.presets,
                filter_string=args.filter,
                ignore_file=args.gitignore,
                include_dotfiles=args.include_dotfiles,
                task=task,
                output_format=args.format,
                tokenizer_model=args.tokenizer,
                permission_action=perm_action,
                preset_store=store,
                auto_detect=not args.no_auto_detect,
            )
        except PermissionError as e:
            if args.permission_action == "fail":
                print(f"Error: {str(e)}", file=sys.stderr)
                sys.exit(126)
            # -P warn reports the problem and produces no output
            print(f"Warning: {str(e)}", file=sys.stderr)
            return

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                safe_writer.write(context.output)

                if args.summary:
                    counts = {
                        "presets": ", ".join(context.preset_names) or "none",
                        "directories": context.directory_count,
                        "files": context.file_count,
                        "errors": context.error_count,
                        "lines": context.line_count,
                        "tokens": context.token_count,
                        "characters": context.character_count,
                    }
                    count_output_str = format_counts(counts)

                    if args.summary in ("stdout", "file"):
                        safe_writer.write("\n" + count_output_str + "\n")
                    else:
                        print(count_output_str, file=sys.stderr)

            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

        if args.output:
            logger.info("Context written to %s", args.output)

    except TokenizerNotAvailableError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print('    pip install "ctxl[token_counting]"', file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
