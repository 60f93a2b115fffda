"""
Exclusion Validation.

Validates the two sources of exclusions and merges them into the
ModuleRequirements applied to every extra dependency:

    - Global exclusions from `--exclude org:name` strings.
    - Per-module exclusions from a local file with one
      `<parent>--<org>:<name>` rule per line.
"""

from __future__ import annotations

import locale
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple, Union

from frozendict import frozendict

from .. import config
from ..core.result import Ok, Validated, fail, map_ok, traverse, zip_accumulate
from ..core.types import (
    DependencyEntries,
    ExclusionPair,
    GlobalExclusionSet,
    ModuleName,
    Organization,
    PerModuleExclusionMap,
)
from ..parsing.base import ModuleParser
from .errors import LocalExcludeFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleRequirements:
    """
    Exclusions applied to user-supplied dependencies.

    Global exclusions apply to every dependency. Per-module exclusions apply
    in addition when the dependency's `org:name` equals a key of the map.

    Attributes:
        global_excludes: Modules excluded from every dependency.
        local_excludes: Modules excluded below one parent module.
    """

    global_excludes: GlobalExclusionSet = frozenset()
    local_excludes: PerModuleExclusionMap = frozendict()

    def exclusions_for(self, org_name: str) -> FrozenSet[ExclusionPair]:
        return self.global_excludes | self.local_excludes.get(org_name, frozenset())

    def __call__(self, entries: DependencyEntries) -> DependencyEntries:
        """Return the entries with exclusions added to each dependency."""
        applied = []
        for dependency, params in entries:
            extra = self.exclusions_for(dependency.module.org_name)
            if extra:
                dependency = dependency.with_exclusions(dependency.exclusions | extra)
            applied.append((dependency, params))
        return applied


# --- Global exclusions ---

def validate_excludes(
    exclude: Sequence[str],
    scala_version: str,
    parser: ModuleParser,
) -> Validated[GlobalExclusionSet]:
    """
    Validate `--exclude` module strings.

    Fails with every parser error when any string is malformed, or with
    every offending module when some carry attributes, which exclusions
    cannot express.
    """
    parsed = parser.modules(exclude, scala_version)
    if not isinstance(parsed, Ok):
        return fail(
            "Cannot parse excluded modules:\n"
            + "\n".join("  " + e for e in parsed.error)
        )

    without_attributes = [m for m in parsed.value if not m.attributes]
    with_attributes = [m for m in parsed.value if m.attributes]

    if with_attributes:
        logger.warning(f"Rejecting {len(with_attributes)} excluded module(s) with attributes")
        return fail(
            "Excluded modules with attributes not supported:\n"
            + "\n".join(f"  {m}" for m in with_attributes)
        )

    return Ok(frozenset((m.organization, m.name) for m in without_attributes))


# --- Local exclusion file ---

def _split(text: str, separator: str) -> List[str]:
    """Split, dropping trailing empty segments (a text without separator stays whole)."""
    if separator not in text:
        return [text]
    parts = text.split(separator)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_exclusion_line(line: str) -> Validated[Tuple[str, ExclusionPair]]:
    """Parse one `<parent>--<org>:<name>` rule."""
    parent_and_child = _split(line, config.PARENT_SEPARATOR)
    if len(parent_and_child) != 2:
        return fail(f"Failed to parse {line}")

    org_and_name = _split(parent_and_child[1], config.MODULE_SEPARATOR)
    if len(org_and_name) != 2:
        return fail(f"Failed to parse {line}")

    parent, (org, name) = parent_and_child[0], org_and_name
    return Ok((parent, (Organization(org), ModuleName(name))))


def parse_local_excludes(text: str) -> Validated[PerModuleExclusionMap]:
    """
    Parse the content of a local exclusion file.

    Every line is checked and every malformed line is reported. Blank lines
    are malformed too.
    """
    def group(rules: List[Tuple[str, ExclusionPair]]) -> PerModuleExclusionMap:
        grouped: Dict[str, Set[ExclusionPair]] = defaultdict(set)
        for parent, pair in rules:
            grouped[parent].add(pair)
        return frozendict((parent, frozenset(pairs)) for parent, pairs in grouped.items())

    return map_ok(traverse(_split(text, "\n"), parse_exclusion_line), group)


def load_local_excludes(
    path: Optional[Union[str, Path]],
) -> Validated[PerModuleExclusionMap]:
    """
    Load per-module exclusions from a local file.

    An empty path means no file: the result is an empty map and nothing is
    read.

    Raises:
        LocalExcludeFileError: If the file cannot be opened or decoded.
    """
    if not path:
        return Ok(frozendict())

    # Platform default codec
    encoding = locale.getpreferredencoding(False)
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Failed to read local exclusion file {path}: {e}")
        raise LocalExcludeFileError(path, e) from e

    logger.debug(f"Read local exclusion file {path} ({len(text)} chars)")
    return parse_local_excludes(text)


# --- Combination ---

def combine_module_requirements(
    excludes: Validated[GlobalExclusionSet],
    local_excludes: Validated[PerModuleExclusionMap],
) -> Validated[ModuleRequirements]:
    """
    Merge both exclusion sources.

    Both must have succeeded; otherwise the errors of each are reported
    together. No error of its own is ever added.
    """
    return map_ok(
        zip_accumulate(excludes, local_excludes),
        lambda pair: ModuleRequirements(global_excludes=pair[0], local_excludes=pair[1]),
    )
