"""
Dependency Parameters.

Validates a DependencyOptions snapshot into the DependencyParams bundle handed
to the resolution engine.

Error reporting:
    - Independent option groups (exclusions, local exclusion file,
      intransitive and sbt plugin dependencies) are all validated and their
      errors reported together.
    - The dependency builders need valid exclusions. When exclusions fail
      the builders only carry that failure forward, so only the exclusion
      branches are reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from frozendict import frozendict

from ..core.result import Err, Ok, Validated, map_ok, zip_accumulate
from ..core.types import (
    Configuration,
    DependencyEntries,
    DependencyEntry,
    GlobalExclusionSet,
    PerModuleExclusionMap,
)
from ..options import DependencyOptions
from ..parsing.base import DependencyParser, ModuleParser
from ..parsing.dependencies import StringDependencyParser
from ..parsing.modules import StringModuleParser
from .dependencies import build_intransitive_dependencies, build_sbt_plugin_dependencies
from .errors import DependencyParamsError
from .exclusions import combine_module_requirements, load_local_excludes, validate_excludes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyParams:
    """
    Validated dependency parameters.

    Attributes:
        exclude: Modules excluded from every dependency.
        per_module_exclude: Modules excluded below a given parent module.
        intransitive_dependencies: Extra dependencies, all non-transitive.
        sbt_plugin_dependencies: Extra sbt plugin dependencies.
        scaladex_lookups: Trimmed, non-empty scaladex queries.
        default_configuration: Configuration of dependencies naming none.
    """

    exclude: GlobalExclusionSet = frozenset()
    per_module_exclude: PerModuleExclusionMap = frozendict()
    intransitive_dependencies: Tuple[DependencyEntry, ...] = ()
    sbt_plugin_dependencies: Tuple[DependencyEntry, ...] = ()
    scaladex_lookups: Tuple[str, ...] = ()
    default_configuration: Configuration = Configuration("")

    @classmethod
    def from_options(
        cls,
        scala_version: str,
        options: DependencyOptions,
        module_parser: Optional[ModuleParser] = None,
        dependency_parser: Optional[DependencyParser] = None,
    ) -> Validated["DependencyParams"]:
        """
        Validate every dependency option.

        Args:
            scala_version: Active Scala version, used for cross-built names
                and plugin attributes.
            options: The raw option snapshot.
            module_parser: Parser for exclusion strings.
            dependency_parser: Parser for dependency strings.

        Returns:
            Ok(DependencyParams), or Err with every error message in order:
            exclusions, local exclusion file, intransitive, sbt plugin.

        Raises:
            LocalExcludeFileError: If the local exclusion file is unreadable.
        """
        module_parser = module_parser or StringModuleParser()
        dependency_parser = dependency_parser or StringDependencyParser()

        exclude_v = validate_excludes(options.exclude, scala_version, module_parser)
        per_module_exclude_v = load_local_excludes(options.local_exclude_file)

        module_req_v = combine_module_requirements(exclude_v, per_module_exclude_v)

        intransitive_v = build_intransitive_dependencies(
            options.intransitive,
            options.configuration,
            scala_version,
            module_req_v,
            dependency_parser,
        )
        sbt_plugin_v = build_sbt_plugin_dependencies(
            options.sbt_plugin,
            options.configuration,
            scala_version,
            options.sbt_version,
            module_req_v,
            dependency_parser,
        )

        default_configuration = Configuration(options.default_configuration)
        scaladex_lookups = tuple(s.strip() for s in options.scaladex if s.strip())

        if isinstance(module_req_v, Ok):
            combined = zip_accumulate(exclude_v, per_module_exclude_v, intransitive_v, sbt_plugin_v)
        else:
            # Builders only carry the exclusion failure, already reported by its own branches
            combined = zip_accumulate(exclude_v, per_module_exclude_v)

        if isinstance(combined, Err):
            logger.debug(f"Dependency options rejected with {len(combined.error)} error(s)")
            return combined

        return map_ok(
            combined,
            lambda values: cls(
                exclude=values[0],
                per_module_exclude=frozendict(values[1]),
                intransitive_dependencies=_freeze_entries(values[2]),
                sbt_plugin_dependencies=_freeze_entries(values[3]),
                scaladex_lookups=scaladex_lookups,
                default_configuration=default_configuration,
            ),
        )

    @classmethod
    def validate(
        cls,
        scala_version: str,
        options: DependencyOptions,
        module_parser: Optional[ModuleParser] = None,
        dependency_parser: Optional[DependencyParser] = None,
    ) -> "DependencyParams":
        """
        Raising variant of from_options.

        Raises:
            DependencyParamsError: Carrying every validation message.
        """
        result = cls.from_options(scala_version, options, module_parser, dependency_parser)
        if isinstance(result, Err):
            raise DependencyParamsError(result.error)
        return result.value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain JSON-friendly types."""
        return {
            "exclude": sorted(f"{org}:{name}" for org, name in self.exclude),
            "per_module_exclude": {
                parent: sorted(f"{org}:{name}" for org, name in pairs)
                for parent, pairs in sorted(self.per_module_exclude.items())
            },
            "intransitive_dependencies": [_entry_to_dict(e) for e in self.intransitive_dependencies],
            "sbt_plugin_dependencies": [_entry_to_dict(e) for e in self.sbt_plugin_dependencies],
            "scaladex_lookups": list(self.scaladex_lookups),
            "default_configuration": self.default_configuration,
        }


def _entry_to_dict(entry: DependencyEntry) -> Dict[str, Any]:
    dependency, params = entry
    return {
        "module": dependency.module.org_name,
        "attributes": dict(dependency.module.attributes),
        "version": dependency.version,
        "configuration": dependency.configuration,
        "transitive": dependency.transitive,
        "exclusions": sorted(f"{org}:{name}" for org, name in dependency.exclusions),
        "params": dict(params),
    }


def _freeze_entries(entries: DependencyEntries) -> Tuple[DependencyEntry, ...]:
    return tuple((dependency, frozendict(params)) for dependency, params in entries)
