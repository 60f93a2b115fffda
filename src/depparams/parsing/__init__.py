"""
String parsers for module and dependency coordinates.
"""

from .base import DependencyParser, ModuleParser, scala_binary_version
from .dependencies import StringDependencyParser, parse_dependency
from .modules import StringModuleParser, parse_module

__all__ = [
    "DependencyParser",
    "ModuleParser",
    "StringDependencyParser",
    "StringModuleParser",
    "parse_dependency",
    "parse_module",
    "scala_binary_version",
]
