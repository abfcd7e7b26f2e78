"""Preset definitions describing the relevant files of common project types."""

from .builtin import BUILT_IN_PRESETS
from .preset import Preset
from .store import DEFAULT_PRESET_FILE, PresetStore, load_user_presets, persist_built_ins, persist_presets

__all__ = [
    "BUILT_IN_PRESETS",
    "DEFAULT_PRESET_FILE",
    "Preset",
    "PresetStore",
    "load_user_presets",
    "persist_built_ins",
    "persist_presets",
]
