"""Preset store merging built-in presets with user overrides.

The built-in table is a process constant. Users may add presets or replace
built-in ones by name through a YAML sidecar file (``ctxl_presets.yaml`` in the
working directory by default)::

    python:
      suffixes: [.py]
      include: ["*.py"]
      exclude: [__pycache__, venv]
    docker:
      suffixes: [.dockerfile]
      prefixes: [Dockerfile]
      include: [Dockerfile]
      exclude: []
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from ctxl.exceptions import PresetParseError
from ctxl.types import PathType

from .builtin import BUILT_IN_PRESETS
from .preset import Preset

logger = logging.getLogger(__name__)

DEFAULT_PRESET_FILE = "ctxl_presets.yaml"


def load_user_presets(preset_file: PathType) -> Dict[str, Preset]:
    """Load user-defined presets from a YAML file.

    Args:
        preset_file: Path to the preset file.

    Returns:
        Mapping of preset name to preset. Empty if the file does not exist or is empty.

    Raises:
        PresetParseError: If the file exists but is not a valid preset table. Nothing
            from a malformed file is returned.

    Example:
        >>> load_user_presets("/nonexistent/ctxl_presets.yaml")
        {}
    """
    path = Path(preset_file)
    if not path.is_file():
        logger.debug("No user preset file at %s", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PresetParseError(path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PresetParseError(path, "expected a mapping of preset names to preset definitions")

    presets: Dict[str, Preset] = {}
    for name, definition in data.items():
        if not isinstance(definition, dict):
            raise PresetParseError(path, f"preset '{name}' must be a mapping")
        try:
            presets[str(name)] = Preset.from_mapping(str(name), definition)
        except ValueError as e:
            raise PresetParseError(path, str(e)) from e

    logger.debug("Loaded %d user presets from %s", len(presets), path)
    return presets


def persist_presets(presets: Mapping[str, Preset], preset_file: PathType) -> None:
    """Write a preset table to a YAML file, replacing its previous content.

    Concurrent writers are not coordinated; callers must serialize saves.
    """
    data = {name: preset.to_mapping() for name, preset in presets.items()}
    with open(preset_file, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    logger.info("Saved %d presets to %s", len(data), preset_file)


def persist_built_ins(preset_file: PathType) -> None:
    """Seed a preset file with the built-in presets so users can edit them."""
    persist_presets(BUILT_IN_PRESETS, preset_file)


class PresetStore:
    """Effective preset table for one process invocation.

    The store is constructed once and handed to the consumers that need presets
    (the pattern combiner and the project type detector). User presets are read
    lazily on first access and cached.

    Attributes:
        preset_file (Optional[Path]): Location of the user preset file, or None to use built-ins only.

    Example:
        >>> store = PresetStore(preset_file=None)
        >>> "python" in store.get_effective_presets()
        True
        >>> store.get("cobol") is None
        True
    """

    def __init__(self, preset_file: Optional[PathType] = DEFAULT_PRESET_FILE) -> None:
        self.preset_file = Path(preset_file) if preset_file is not None else None
        self._presets: Optional[Dict[str, Preset]] = None

    def get_effective_presets(self) -> Dict[str, Preset]:
        """Return built-in presets overlaid with user presets.

        A user preset with the same name as a built-in one replaces it entirely.

        Raises:
            PresetParseError: If the user preset file is malformed.
        """
        if self._presets is None:
            presets = dict(BUILT_IN_PRESETS)
            if self.preset_file is not None:
                presets.update(load_user_presets(self.preset_file))
            self._presets = presets
        return dict(self._presets)

    def get(self, name: str) -> Optional[Preset]:
        return self.get_effective_presets().get(name)

    def names(self) -> List[str]:
        return sorted(self.get_effective_presets())

    def reload(self) -> None:
        """Forget cached presets so the user file is read again on next access."""
        self._presets = None

    def view_presets(self) -> str:
        """Render the effective preset table as YAML text."""
        data = {name: preset.to_mapping() for name, preset in self.get_effective_presets().items()}
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)

    def save_built_ins(self) -> Path:
        """Write the built-in presets to this store's preset file.

        Returns:
            The path written to.

        Raises:
            ValueError: If the store has no preset file configured.
        """
        if self.preset_file is None:
            raise ValueError("No preset file configured for this store")
        persist_built_ins(self.preset_file)
        self.reload()
        return self.preset_file
