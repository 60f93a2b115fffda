"""
Extra Dependency Builders.

Builds the intransitive and sbt plugin dependencies passed on the command
line. Both depend on the validated ModuleRequirements: when exclusions are
invalid, these builders add no error of their own.
"""

import logging
from typing import Dict, Sequence

from ..core.result import Ok, Validated, and_then, fail
from ..core.types import Configuration, DependencyEntries
from ..parsing.base import DependencyParser
from .exclusions import ModuleRequirements

logger = logging.getLogger(__name__)


def _parse_or_fail(
    label: str,
    raw: Sequence[str],
    configuration: Configuration,
    scala_version: str,
    parser: DependencyParser,
) -> Validated[DependencyEntries]:
    parsed = parser.dependencies_params(raw, configuration, scala_version)
    if not isinstance(parsed, Ok):
        return fail(
            f"Cannot parse {label}:\n"
            + "\n".join("  " + e for e in parsed.error)
        )
    return parsed


def build_intransitive_dependencies(
    raw: Sequence[str],
    configuration: Configuration,
    scala_version: str,
    requirements: Validated[ModuleRequirements],
    parser: DependencyParser,
) -> Validated[DependencyEntries]:
    """
    Parse `--intransitive` dependencies.

    Every dependency is marked non-transitive, whatever its string said,
    then the module requirements are applied.
    """
    def build(module_req: ModuleRequirements) -> Validated[DependencyEntries]:
        parsed = _parse_or_fail(
            "intransitive dependencies", raw, configuration, scala_version, parser
        )
        if not isinstance(parsed, Ok):
            return parsed

        entries = [(dep.with_transitive(False), params) for dep, params in parsed.value]
        logger.debug(f"Built {len(entries)} intransitive dependencies")
        return Ok(module_req(entries))

    return and_then(requirements, build)


def _short_version(version: str) -> str:
    return ".".join(version.split(".")[:2])


def sbt_plugin_defaults(scala_version: str, sbt_version: str) -> Dict[str, str]:
    """
    Attributes every sbt plugin dependency gets unless it sets them itself.

    All sbt 1.x releases publish plugins under the short version "1.0".
    """
    if sbt_version.split(".")[0] == "1":
        short_sbt_version = "1.0"
    else:
        short_sbt_version = _short_version(sbt_version)

    return {
        "scalaVersion": _short_version(scala_version),
        "sbtVersion": short_sbt_version,
    }


def build_sbt_plugin_dependencies(
    raw: Sequence[str],
    configuration: Configuration,
    scala_version: str,
    sbt_version: str,
    requirements: Validated[ModuleRequirements],
    parser: DependencyParser,
) -> Validated[DependencyEntries]:
    """
    Parse `--sbt-plugin` dependencies.

    Module attributes are the injected scalaVersion / sbtVersion defaults
    overridden by whatever the dependency string set explicitly. The module
    requirements are applied last.
    """
    def build(module_req: ModuleRequirements) -> Validated[DependencyEntries]:
        if not raw:
            return Ok([])

        parsed = _parse_or_fail(
            "sbt plugin dependencies", raw, configuration, scala_version, parser
        )
        if not isinstance(parsed, Ok):
            return parsed

        entries = []
        for dep, params in parsed.value:
            attributes = {
                **sbt_plugin_defaults(scala_version, sbt_version),
                **dep.module.attributes,
            }
            entries.append((dep.with_module_attributes(attributes), params))

        logger.debug(f"Built {len(entries)} sbt plugin dependencies for sbt {sbt_version}")
        return Ok(module_req(entries))

    return and_then(requirements, build)
