"""
Dependency option snapshot and its depparams.toml loader.

Options come either from the command line or from a `[dependencies]` table:

    [dependencies]
    exclude = ["org.slf4j:slf4j-log4j12"]
    local_exclude_file = "excludes.txt"
    intransitive = ["com.lihaoyi::sourcecode:0.3.0"]
    sbt_plugin = ["org.scalameta:sbt-scalafmt:2.5.2"]
    sbt_version = "1.9.7"
    scaladex = ["circe"]
    default_configuration = "default(compile)"
"""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from . import config
from .core.types import Configuration

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_LIST_FIELDS = ("exclude", "intransitive", "sbt_plugin", "scaladex")
_STRING_FIELDS = ("local_exclude_file", "sbt_version", "default_configuration")


@dataclass(frozen=True)
class DependencyOptions:
    """
    Immutable snapshot of the raw dependency options.

    Attributes:
        exclude: Modules excluded from every dependency (`org:name`).
        local_exclude_file: Path to a per-module exclusion file, or "".
        intransitive: Dependencies to add without their own dependencies.
        sbt_plugin: sbt plugin dependencies.
        sbt_version: sbt version the plugins target.
        scaladex: Free-form scaladex lookups.
        default_configuration: Configuration for dependencies that name none.
    """

    exclude: Tuple[str, ...] = ()
    local_exclude_file: str = ""
    intransitive: Tuple[str, ...] = ()
    sbt_plugin: Tuple[str, ...] = ()
    sbt_version: str = config.DEFAULT_SBT_VERSION
    scaladex: Tuple[str, ...] = ()
    default_configuration: str = config.DEFAULT_CONFIGURATION

    @property
    def configuration(self) -> Configuration:
        """Configuration used when parsing dependency strings."""
        return Configuration(self.default_configuration)

    def merge(self, **overrides: Any) -> "DependencyOptions":
        """
        Return a copy with the given fields replaced.

        None and empty sequences are ignored, so unset CLI flags keep the
        values loaded from the manifest.
        """
        changes = {}
        for key, value in overrides.items():
            if value is None or (key in _LIST_FIELDS and not value):
                continue
            changes[key] = tuple(value) if key in _LIST_FIELDS else value
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyOptions":
        """
        Build options from a TOML table.

        Raises:
            ValueError: On unknown keys or values of the wrong type.
        """
        unknown = set(data) - set(_LIST_FIELDS) - set(_STRING_FIELDS)
        if unknown:
            raise ValueError(f"Unknown dependency option(s): {', '.join(sorted(unknown))}")

        values: Dict[str, Any] = {}
        for key in _LIST_FIELDS:
            if key in data:
                value = data[key]
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ValueError(f"Option '{key}' must be a list of strings")
                values[key] = tuple(value)
        for key in _STRING_FIELDS:
            if key in data:
                if not isinstance(data[key], str):
                    raise ValueError(f"Option '{key}' must be a string")
                values[key] = data[key]

        return cls(**values)

    @classmethod
    def load(cls, path: Path) -> "DependencyOptions":
        """
        Load options from a depparams.toml file.

        A relative `local_exclude_file` is resolved against the manifest's
        directory.

        Returns:
            DependencyOptions: Parsed options. Defaults if the file does not exist.

        Raises:
            ValueError: If the TOML file is malformed.
        """
        if not path.exists():
            return cls()

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        try:
            options = cls.from_dict(data.get(config.MANIFEST_SECTION, {}))
        except ValueError as e:
            raise ValueError(f"Invalid [{config.MANIFEST_SECTION}] in {path}: {e}")

        if options.local_exclude_file and not Path(options.local_exclude_file).is_absolute():
            resolved = path.parent / options.local_exclude_file
            options = dataclasses.replace(options, local_exclude_file=str(resolved))

        return options
