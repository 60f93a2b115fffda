"""
Base Parser Infrastructure.

Defines the collaborator interfaces used by dependency parameter validation,
plus helpers shared by the module and dependency string grammars.
"""

import logging
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ..core.result import Err, Ok, Validated
from ..core.types import Configuration, DependencyEntries, Module, ModuleName, Organization

logger = logging.getLogger(__name__)


class ModuleParser(Protocol):
    """Parses `org:name` module strings."""

    def modules(self, raw: Sequence[str], scala_version: str) -> Validated[List[Module]]:
        """Parse every string, returning all modules or every error."""
        ...


class DependencyParser(Protocol):
    """Parses `org:name:version` dependency strings."""

    def dependencies_params(
        self,
        raw: Sequence[str],
        default_configuration: Configuration,
        scala_version: str,
    ) -> Validated[DependencyEntries]:
        """Parse every string, returning all (Dependency, params) pairs or every error."""
        ...


def scala_binary_version(scala_version: str) -> str:
    """
    Short Scala version used in cross-built artifact names.

    Scala 3 artifacts are suffixed with `_3`, older ones with major.minor.
    """
    parts = scala_version.split(".")
    if parts[0] == "3":
        return "3"
    return ".".join(parts[:2])


def split_cross_module(text: str) -> Optional[Tuple[str, str, str]]:
    """
    Split the organization off a coordinate string.

    Returns (organization, rest, cross) where cross is "full" for `:::`,
    "binary" for `::` and "" for a plain `:`. Returns None when there is no
    separator at all.
    """
    for separator, cross in ((":::", "full"), ("::", "binary"), (":", "")):
        if separator in text:
            org, rest = text.split(separator, 1)
            return org, rest, cross
    return None


def parse_attributes(raw: str, parts: Sequence[str]) -> Tuple[Dict[str, str], List[str]]:
    """Parse `key=value` attribute segments, collecting malformed ones."""
    attributes: Dict[str, str] = {}
    errors: List[str] = []
    for part in parts:
        key, sep, value = part.partition("=")
        if not sep or not key or not value:
            errors.append(f"{raw}: malformed attribute '{part}' (expected key=value)")
            continue
        attributes[key] = value
    return attributes, errors


def build_module(
    raw: str,
    org: str,
    name_with_attributes: str,
    cross: str,
    scala_version: str,
) -> Validated[Module]:
    """
    Build a Module from an organization and a `name[;k=v]*` segment.

    Cross-built names get the Scala suffix appended: binary version for
    `::`, full version for `:::`.
    """
    name, *attr_parts = name_with_attributes.split(";")
    errors: List[str] = []

    if not org:
        errors.append(f"{raw}: empty organization")
    if not name:
        errors.append(f"{raw}: empty module name")
    elif ":" in name:
        errors.append(f"{raw}: unexpected ':' in module name '{name}'")

    attributes, attr_errors = parse_attributes(raw, attr_parts)
    errors.extend(attr_errors)

    if errors:
        return Err(errors)

    if cross == "binary":
        name = f"{name}_{scala_binary_version(scala_version)}"
    elif cross == "full":
        name = f"{name}_{scala_version}"

    return Ok(Module(
        organization=Organization(org),
        name=ModuleName(name),
        attributes=attributes,
    ))
