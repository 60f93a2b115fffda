"""
depparams Core Module.

Building blocks shared by the parsers and the parameter validators:

    - Ok, Err, zip_accumulate, and_then: explicit validation results
    - Module, Dependency: the typed dependency model
"""

from .result import Err, Ok, Result, Validated, and_then, fail, map_ok, traverse, zip_accumulate
from .types import (
    Configuration,
    Dependency,
    DependencyEntries,
    DependencyEntry,
    ExclusionPair,
    GlobalExclusionSet,
    Module,
    ModuleName,
    Organization,
    ParameterMap,
    PerModuleExclusionMap,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "Validated",
    "and_then",
    "fail",
    "map_ok",
    "traverse",
    "zip_accumulate",
    # Types
    "Configuration",
    "Dependency",
    "DependencyEntries",
    "DependencyEntry",
    "ExclusionPair",
    "GlobalExclusionSet",
    "Module",
    "ModuleName",
    "Organization",
    "ParameterMap",
    "PerModuleExclusionMap",
]
