"""Preset record describing which files belong to a project type."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Preset:
    """Named bundle of filename rules identifying a project type's relevant files.

    Attributes:
        name (str): Preset name, e.g. ``"python"``.
        suffixes (Tuple[str, ...]): File extensions (with leading dot) used for project type detection.
        include (Tuple[str, ...]): Gitignore-style patterns selecting files to emit.
        exclude (Tuple[str, ...]): Gitignore-style patterns for paths to skip.
        prefixes (Optional[Tuple[str, ...]]): Case-insensitive filename prefixes used for detection,
            or None when the preset defines none.

    Example:
        >>> preset = Preset.from_mapping("go", {"suffixes": [".go"], "include": ["*.go"], "exclude": ["vendor"]})
        >>> preset.include
        ('*.go',)
        >>> preset.prefixes is None
        True
        >>> preset.to_mapping()
        {'suffixes': ['.go'], 'include': ['*.go'], 'exclude': ['vendor']}
    """

    name: str
    suffixes: Tuple[str, ...]
    include: Tuple[str, ...]
    exclude: Tuple[str, ...]
    prefixes: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "Preset":
        """Build a preset from its serialized form.

        Raises:
            ValueError: If the mapping lacks a required field or a field is not a list of strings.
        """
        fields: Dict[str, Optional[Tuple[str, ...]]] = {}
        for key in ("suffixes", "include", "exclude", "prefixes"):
            value = data.get(key)
            if value is None:
                if key != "prefixes":
                    raise ValueError(f"preset '{name}' is missing required field '{key}'")
                fields[key] = None
                continue
            if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
                raise ValueError(f"field '{key}' of preset '{name}' must be a list of strings")
            fields[key] = tuple(value)

        return cls(
            name=name,
            suffixes=fields["suffixes"] or (),
            include=fields["include"] or (),
            exclude=fields["exclude"] or (),
            prefixes=fields["prefixes"],
        )

    def to_mapping(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "suffixes": list(self.suffixes),
            "include": list(self.include),
            "exclude": list(self.exclude),
        }
        if self.prefixes is not None:
            data["prefixes"] = list(self.prefixes)
        return data
