"""
Module String Parser.

Grammar:
    org:name[;key=value]*       plain module
    org::name[;key=value]*      cross-built, name gets _<scala binary version>
    org:::name[;key=value]*     cross-built, name gets _<full scala version>
"""

import logging
from typing import List, Sequence

from ..core.result import Err, Validated, traverse
from ..core.types import Module
from .base import build_module, split_cross_module

logger = logging.getLogger(__name__)


def parse_module(raw: str, scala_version: str) -> Validated[Module]:
    """Parse a single module string."""
    text = raw.strip()
    split = split_cross_module(text)
    if split is None:
        return Err([f"{raw}: malformed module (expected org:name)"])

    org, rest, cross = split
    return build_module(raw, org, rest, cross, scala_version)


class StringModuleParser:
    """Default ModuleParser for command-line module strings."""

    def modules(self, raw: Sequence[str], scala_version: str) -> Validated[List[Module]]:
        logger.debug(f"Parsing {len(raw)} module string(s) for Scala {scala_version}")
        return traverse(raw, lambda item: parse_module(item, scala_version))
