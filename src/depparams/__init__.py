"""
depparams: validation of dependency options for a dependency resolver.
"""

from .options import DependencyOptions
from .params import DependencyParams, DependencyParamsError, LocalExcludeFileError

__version__ = "0.1.0"

__all__ = [
    "DependencyOptions",
    "DependencyParams",
    "DependencyParamsError",
    "LocalExcludeFileError",
]
