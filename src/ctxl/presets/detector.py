"""Detection of project types present in a directory."""

import logging
import os
from typing import Mapping, Set

from ctxl.filter_rules.combiner import FilterRuleSet
from ctxl.project_tree.filter_engine import FilterEngine
from ctxl.project_tree.traversal import Visit, traverse
from ctxl.types import PathType

from .preset import Preset
from .store import PresetStore

logger = logging.getLogger(__name__)


def match_presets(filename: str, presets: Mapping[str, Preset]) -> Set[str]:
    """Return the names of the presets a single filename belongs to.

    A file matches a preset when its name starts with one of the preset's prefixes
    (case-insensitive), when its extension is one of the preset's suffixes, or when
    its name is literally listed among the preset's include patterns.

    Example:
        >>> from ctxl.presets.builtin import BUILT_IN_PRESETS
        >>> sorted(match_presets("Dockerfile.dev", BUILT_IN_PRESETS))
        ['docker']
        >>> sorted(match_presets("docker-compose.yml", BUILT_IN_PRESETS))
        ['docker', 'misc']
        >>> match_presets("LICENSE", BUILT_IN_PRESETS)
        set()
    """
    matched: Set[str] = set()
    lowered = filename.lower()
    extension = os.path.splitext(filename)[1]

    for name, preset in presets.items():
        if preset.prefixes and any(lowered.startswith(prefix.lower()) for prefix in preset.prefixes):
            matched.add(name)
        elif extension and extension in preset.suffixes:
            matched.add(name)
        elif filename in preset.include:
            matched.add(name)

    return matched


def detect_project_types(root: PathType, store: PresetStore) -> Set[str]:
    """Scan a directory and report which presets apply to the files it contains.

    Hidden entries and ``node_modules`` are skipped, like in a default scan.

    Args:
        root: Directory to inspect.
        store: Preset store providing the presets to match against.

    Returns:
        Names of all presets matched by at least one file.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.
        PresetParseError: If the store's user preset file is malformed.
    """
    presets = store.get_effective_presets()
    detected: Set[str] = set()

    def visit(step: Visit) -> None:
        if not step.entry.is_directory:
            detected.update(match_presets(step.entry.name, presets))

    traverse(root, FilterEngine(FilterRuleSet.default()), visit)
    logger.debug("Detected project types: %s", sorted(detected))
    return detected
