"""
Global Configuration and Defaults.

This module centralizes the defaults applied to dependency options when the
user does not provide them, and the separators of the exclusion file format.
"""

# --- Option Defaults ---

# Configuration used when a dependency string does not name one
DEFAULT_CONFIGURATION = "default(compile)"

DEFAULT_SCALA_VERSION = "2.13.12"

# sbt version used to compute the sbtVersion attribute of plugin dependencies
DEFAULT_SBT_VERSION = "1.0"

# --- Local Exclusion File ---

# <parent>--<org>:<name>
PARENT_SEPARATOR = "--"
MODULE_SEPARATOR = ":"

# --- Manifest ---

MANIFEST_FILE_NAME = "depparams.toml"
MANIFEST_SECTION = "dependencies"
