"""
Dependency String Parser.

Grammar:
    <module>:<version>[:<configuration>][,key=value]*

where <module> follows the module grammar (`:`, `::` or `:::` after the
organization, `;key=value` attributes after the name).

Recognized parameters are folded into the Dependency:
    classifier=<classifier>
    type=<type>
    exclude=<org>%<name>        (may be repeated)
    transitive=true|false

Any other parameter (e.g. url=...) is kept in the ParameterMap handed back
alongside the dependency.
"""

import logging
from typing import Dict, List, Sequence, Set

from frozendict import frozendict

from ..core.result import Err, Ok, Validated, and_then, traverse
from ..core.types import (
    Configuration,
    Dependency,
    DependencyEntries,
    DependencyEntry,
    ExclusionPair,
    Module,
    ModuleName,
    Organization,
)
from .base import build_module, split_cross_module

logger = logging.getLogger(__name__)

_BOOLEANS = {"true": True, "false": False}


def _apply_params(
    raw: str,
    dependency: Dependency,
    param_parts: Sequence[str],
) -> Validated[DependencyEntry]:
    params: Dict[str, str] = {}
    updates = {}
    exclusions: Set[ExclusionPair] = set()
    errors: List[str] = []

    for part in param_parts:
        key, sep, value = part.partition("=")
        if not sep or not key:
            errors.append(f"{raw}: malformed parameter '{part}' (expected key=value)")
            continue

        if key in ("classifier", "type"):
            updates[key] = value
        elif key == "exclude":
            org, sep, name = value.partition("%")
            if not sep or not org or not name:
                errors.append(f"{raw}: malformed exclusion '{value}' (expected org%name)")
                continue
            exclusions.add((Organization(org), ModuleName(name)))
        elif key == "transitive":
            if value.lower() not in _BOOLEANS:
                errors.append(f"{raw}: invalid transitive value '{value}'")
                continue
            updates["transitive"] = _BOOLEANS[value.lower()]
        else:
            params[key] = value

    if errors:
        return Err(errors)

    if exclusions:
        updates["exclusions"] = dependency.exclusions | frozenset(exclusions)

    return Ok((dependency.model_copy(update=updates), frozendict(params)))


def parse_dependency(
    raw: str,
    default_configuration: Configuration,
    scala_version: str,
) -> Validated[DependencyEntry]:
    """Parse a single dependency string into a (Dependency, params) pair."""
    coordinates, *param_parts = raw.strip().split(",")

    split = split_cross_module(coordinates)
    if split is None:
        return Err([f"{raw}: malformed dependency (expected org:name:version)"])

    org, rest, cross = split
    segments = rest.split(":")
    if len(segments) < 2 or len(segments) > 3:
        return Err([f"{raw}: malformed dependency (expected org:name:version[:config])"])

    name_with_attributes, version = segments[0], segments[1]
    if not version:
        return Err([f"{raw}: empty version"])

    configuration = default_configuration
    if len(segments) == 3:
        if not segments[2]:
            return Err([f"{raw}: empty configuration"])
        configuration = Configuration(segments[2])

    def to_dependency(module: Module) -> Validated[DependencyEntry]:
        dependency = Dependency(
            module=module,
            version=version,
            configuration=configuration,
        )
        return _apply_params(raw, dependency, param_parts)

    module = build_module(raw, org, name_with_attributes, cross, scala_version)
    return and_then(module, to_dependency)


class StringDependencyParser:
    """Default DependencyParser for command-line dependency strings."""

    def dependencies_params(
        self,
        raw: Sequence[str],
        default_configuration: Configuration,
        scala_version: str,
    ) -> Validated[DependencyEntries]:
        logger.debug(
            f"Parsing {len(raw)} dependency string(s) "
            f"(configuration={default_configuration}, scala={scala_version})"
        )
        return traverse(
            raw,
            lambda item: parse_dependency(item, default_configuration, scala_version),
        )
