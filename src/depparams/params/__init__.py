"""
Dependency parameter validation.

Turns raw dependency options into a validated DependencyParams bundle:

    - validate_excludes / load_local_excludes: the two exclusion sources
    - combine_module_requirements: exclusions applied to extra dependencies
    - build_intransitive_dependencies / build_sbt_plugin_dependencies
    - DependencyParams.from_options: every group validated together
"""

from .dependencies import (
    build_intransitive_dependencies,
    build_sbt_plugin_dependencies,
    sbt_plugin_defaults,
)
from .dependency_params import DependencyParams
from .errors import DependencyParamsError, LocalExcludeFileError
from .exclusions import (
    ModuleRequirements,
    combine_module_requirements,
    load_local_excludes,
    parse_local_excludes,
    validate_excludes,
)

__all__ = [
    "DependencyParams",
    "DependencyParamsError",
    "LocalExcludeFileError",
    "ModuleRequirements",
    "build_intransitive_dependencies",
    "build_sbt_plugin_dependencies",
    "combine_module_requirements",
    "load_local_excludes",
    "parse_local_excludes",
    "sbt_plugin_defaults",
    "validate_excludes",
]
