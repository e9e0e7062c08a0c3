"""Configuration for a grammar build pass.

All directories and patterns are configurable; defaults follow the usual
``src/main/antlr3`` project layout.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union

import yaml

from ..core.discovery import default_includes, with_imports_excluded
from ..core.engine import ToolOptions

PathLike = Union[str, Path]

DEFAULT_SOURCE_DIRECTORY = "src/main/antlr3"
DEFAULT_OUTPUT_DIRECTORY = "target/generated-sources/antlr3"
DEFAULT_LIB_DIRECTORY = "src/main/antlr3/imports"

CONFIG_SECTION = "grammar_gen"


def _pattern_set(patterns: Optional[Iterable[str]]) -> FrozenSet[str]:
    if patterns is None:
        return frozenset()
    if isinstance(patterns, str):
        return frozenset({patterns})
    return frozenset(patterns)


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration of one grammar build pass.

    Attributes
    ----------
    source_directory : Path
        Where the grammar files live
    output_directory : Path
        Where generated sources are written; registered with the build on success
    lib_directory : Path
        Where imported grammars and ``.tokens`` files are looked up
    includes : FrozenSet[str]
        Ant-style include patterns; empty means ``**/*.g``
    excludes : FrozenSet[str]
        Ant-style exclude patterns; ``imports/**`` is always added on top
    options : ToolOptions
        Engine options

    Example
    -------
    >>> config = GeneratorConfig.from_yaml(Path("grammar-gen.yaml")).resolve(Path.cwd())
    >>> sorted(config.effective_excludes())
    ['imports/**']
    """

    source_directory: Path = Path(DEFAULT_SOURCE_DIRECTORY)
    output_directory: Path = Path(DEFAULT_OUTPUT_DIRECTORY)
    lib_directory: Path = Path(DEFAULT_LIB_DIRECTORY)
    includes: FrozenSet[str] = frozenset()
    excludes: FrozenSet[str] = frozenset()
    options: ToolOptions = field(default_factory=ToolOptions)

    def __post_init__(self):
        for name in ("source_directory", "output_directory", "lib_directory"):
            object.__setattr__(self, name, Path(getattr(self, name)))
        object.__setattr__(self, "includes", _pattern_set(self.includes))
        object.__setattr__(self, "excludes", _pattern_set(self.excludes))

    def effective_includes(self) -> FrozenSet[str]:
        """Include patterns with the default applied."""
        return default_includes(self.includes)

    def effective_excludes(self) -> FrozenSet[str]:
        """Exclude patterns plus the imports subtree, as a new set."""
        return with_imports_excluded(self.excludes)

    def resolve(self, base_dir: PathLike) -> "GeneratorConfig":
        """Return a copy with relative directories anchored at base_dir."""
        base = Path(base_dir).absolute()

        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base / path

        return replace(
            self,
            source_directory=anchor(self.source_directory),
            output_directory=anchor(self.output_directory),
            lib_directory=anchor(self.lib_directory),
        )

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Return a copy with the given fields replaced.

        Keys named after a :class:`ToolOptions` field update the options.
        ``None`` values are ignored so unset CLI flags leave the file's values.
        """
        option_names = {f.name for f in fields(ToolOptions)}
        config_changes = {}
        option_changes = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key in option_names:
                option_changes[key] = value
            else:
                config_changes[key] = value
        if option_changes:
            config_changes["options"] = replace(self.options, **option_changes)
        return replace(self, **config_changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Create configuration from a dictionary.

        Raises
        ------
        ValueError
            If the dictionary holds unknown keys or invalid option values
        """
        data = dict(data or {})
        options = data.pop("options", None) or {}

        known = {f.name for f in fields(cls)} - {"options"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        option_names = {f.name for f in fields(ToolOptions)}
        unknown = sorted(set(options) - option_names)
        if unknown:
            raise ValueError(f"Unknown tool options: {', '.join(unknown)}")

        return cls(options=ToolOptions(**options), **data)

    @classmethod
    def from_yaml(cls, path: PathLike) -> "GeneratorConfig":
        """Load configuration from YAML file.

        The file may hold the settings at top level or under a
        ``grammar_gen`` section.

        Raises
        ------
        FileNotFoundError
            If config file doesn't exist
        ValueError
            If the file or its section is not a mapping
        yaml.YAMLError
            If YAML is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")
        if CONFIG_SECTION in data:
            data = data[CONFIG_SECTION] or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration section '{CONFIG_SECTION}' must be a mapping")

        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "GeneratorConfig":
        """Create default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source_directory": str(self.source_directory),
            "output_directory": str(self.output_directory),
            "lib_directory": str(self.lib_directory),
            "includes": sorted(self.includes),
            "excludes": sorted(self.excludes),
            "options": self.options.to_dict(),
        }
