"""Project context generation.

This module ties the pieces together: it resolves presets (detecting them when
none are given), combines them with ad-hoc filters, scans the project, renders
its tree and serializes everything into one document.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from ctxl.document import Document, assemble
from ctxl.exceptions import TokenizationError
from ctxl.filter_rules.combiner import FilterRuleSet, combine_presets
from ctxl.output_strategies import get_strategy
from ctxl.presets.detector import detect_project_types
from ctxl.presets.store import PresetStore
from ctxl.project_tree.filter_engine import FilterEngine
from ctxl.project_tree.permission_action import PermissionAction
from ctxl.project_tree.scanner import ProjectScanner
from ctxl.project_tree.tree_renderer import TreeRenderer
from ctxl.token_counter import TokenCounter
from ctxl.types import PathType, Record

logger = logging.getLogger(__name__)

DEFAULT_TASK = """Describe this coding project in detail.

Pay special attention to the structure of the code, the design of the project, any frameworks/UI frameworks used, \
and the overall structure/workflow.

If artifacts are available, then include any diagrams or charts that you think would be helpful.

When suggesting new code or updates always output the entire file, not just the changes.
"""


class ProjectContext:
    """Complete project context for one directory, generated on construction.

    The whole document is built in memory. The file scanner and the tree renderer
    share one FilterEngine, so the directory structure lists exactly the files
    whose contents (or read errors) appear in the document.

    Attributes:
        directory (Path): Project root.
        preset_names (List[str]): Presets applied, after auto-detection.
        detected_presets (Set[str]): Presets found by auto-detection (empty if not run).
        rules (FilterRuleSet): Effective include and exclude patterns.
        records (List[Record]): File and error records in traversal order.
        tree_text (str): Rendered directory structure.
        document (Document): Assembled document.
        output (str): Serialized document.

    Example:
        >>> context = ProjectContext("src", presets=["python"])  # doctest: +SKIP
        >>> print(context.output)  # doctest: +SKIP
        <?xml version="1.0" encoding="UTF-8"?>
        <root>
        ...
        >>> context.file_count, context.error_count  # doctest: +SKIP
        (12, 0)

    Raises:
        ValueError: If directory is invalid or the output format is unsupported.
        PresetParseError: If the user preset file is malformed.
        PermissionError: If a directory can't be listed and permission_action is "raise".
        TokenizerNotAvailableError: If a tokenizer model is given but tiktoken is not installed.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        presets: Optional[Sequence[str]] = None,
        filter_string: Optional[str] = None,
        ignore_file: Optional[PathType] = None,
        include_dotfiles: bool = False,
        task: str = DEFAULT_TASK,
        output_format: str = "xml",
        tokenizer_model: Optional[str] = None,
        permission_action: Union[str, PermissionAction] = PermissionAction.IGNORE,
        preset_store: Optional[PresetStore] = None,
        auto_detect: bool = True,
    ) -> None:
        """Resolve presets and generate the project context.

        Args:
            directory: Project directory to process.
            presets: Preset names to apply. When empty and auto_detect is True, presets
                are detected from the files in the directory.
            filter_string: Ad-hoc filter tokens; ``!pattern`` excludes, ``pattern`` includes.
            ignore_file: Ignore file to honour. Defaults to ``<directory>/.gitignore``.
            include_dotfiles: Whether dot-prefixed files and directories may be included.
            task: Task description placed at the end of the document.
            output_format: 'xml' or 'json'.
            tokenizer_model: Model whose tokenizer counts tokens of the output, or None.
            permission_action: "ignore" or "raise" for unreadable directories.
            preset_store: Store to resolve preset names against. Defaults to a store
                reading the user preset file from the working directory.
            auto_detect: Whether to detect presets when none are given.
        """
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise ValueError(f"'{directory}' is not a valid directory")

        self._strategy = get_strategy(output_format)

        if isinstance(permission_action, str):
            try:
                permission_action = PermissionAction(permission_action.lower())
            except ValueError:
                raise ValueError(f"Invalid permission_action: {permission_action}. Must be one of: 'ignore', 'raise'")

        self._counter = TokenCounter(model=tokenizer_model)
        self.preset_store = preset_store if preset_store is not None else PresetStore()

        self.detected_presets: Set[str] = set()
        self.preset_names: List[str] = list(presets or [])
        if not self.preset_names and auto_detect:
            self.detected_presets = detect_project_types(self.directory, self.preset_store)
            self.preset_names = sorted(self.detected_presets)
            logger.info("Detected presets: %s", ", ".join(self.preset_names) or "none")

        self.rules: FilterRuleSet = combine_presets(self.preset_names, filter_string, self.preset_store)

        engine = FilterEngine.for_root(
            self.directory, self.rules, ignore_file=ignore_file, include_dotfiles=include_dotfiles
        )
        self._scanner = ProjectScanner(self.directory, engine, permission_action=permission_action)
        self._renderer = TreeRenderer(self.directory, engine, permission_action=permission_action)

        self.records: List[Record] = self._scanner.scan()
        self.tree_text: str = self._renderer.render()
        self.document: Document = assemble(self.records, self.tree_text, task)
        self.output: str = self._strategy.format_document(self.document)

        try:
            self._counter.count(self.output)
        except TokenizationError as e:
            # Counts are informational; the document itself is complete
            logger.warning("%s", e)

    @property
    def file_count(self) -> int:
        """Number of files read successfully."""
        return self._scanner.file_count

    @property
    def error_count(self) -> int:
        """Number of files that could not be read."""
        return self._scanner.error_count

    @property
    def directory_count(self) -> int:
        """Number of directories listed in the tree (excluding the root)."""
        return self._renderer.directory_count

    @property
    def line_count(self) -> int:
        return self._counter.get_total_lines()

    @property
    def character_count(self) -> int:
        return self._counter.get_total_characters()

    @property
    def token_count(self) -> Optional[int]:
        """Tokens in the serialized output, or None if token counting is disabled."""
        return self._counter.get_total_tokens()

    def get_file_extension(self) -> str:
        return self._strategy.get_file_extension()


def generate_context(
    directory: PathType,
    *,
    presets: Optional[Sequence[str]] = None,
    filter_string: Optional[str] = None,
    ignore_file: Optional[PathType] = None,
    include_dotfiles: bool = False,
    task: str = DEFAULT_TASK,
    output_format: str = "xml",
    preset_store: Optional[PresetStore] = None,
) -> str:
    """Generate the serialized project context for a directory.

    Takes the same arguments as ProjectContext and returns its output.
    """
    return ProjectContext(
        directory,
        presets=presets,
        filter_string=filter_string,
        ignore_file=ignore_file,
        include_dotfiles=include_dotfiles,
        task=task,
        output_format=output_format,
        preset_store=preset_store,
    ).output
