"""
Core type definitions for depparams.

Models the coordinates handed to the resolution engine: modules,
dependencies and the exclusion pairs attached to them.
"""

from typing import Annotated, FrozenSet, List, Mapping, NewType, Tuple

from frozendict import frozendict
from pydantic import AfterValidator, BaseModel, ConfigDict

Organization = NewType("Organization", str)
ModuleName = NewType("ModuleName", str)
Configuration = NewType("Configuration", str)

# (organization, name) pair identifying a module to leave out of resolution
ExclusionPair = Tuple[Organization, ModuleName]
GlobalExclusionSet = FrozenSet[ExclusionPair]

# FIXME: key should be a Module rather than its free-form "org:name" string
PerModuleExclusionMap = Mapping[str, FrozenSet[ExclusionPair]]

# Free-form per-dependency metadata (e.g. url=...)
ParameterMap = Mapping[str, str]

# String mapping stored as a frozendict once validated
FrozenMapping = Annotated[Mapping[str, str], AfterValidator(lambda v: frozendict(v))]


class Module(BaseModel):
    """
    Organization and name of a dependency, independent of its version.

    Attributes are extra coordinates (e.g. scalaVersion / sbtVersion for
    sbt plugins) that take part in artifact lookup.
    """
    organization: Organization
    name: ModuleName
    attributes: FrozenMapping = frozendict()

    model_config = ConfigDict(frozen=True)

    @property
    def org_name(self) -> str:
        return f"{self.organization}:{self.name}"

    def with_attributes(self, attributes: Mapping[str, str]) -> "Module":
        return self.model_copy(update={"attributes": frozendict(attributes)})

    def __str__(self) -> str:
        attrs = "".join(f";{k}={v}" for k, v in sorted(self.attributes.items()))
        return f"{self.org_name}{attrs}"


class Dependency(BaseModel):
    """
    A module at a given version, plus the build metadata the resolver needs.
    """
    module: Module
    version: str
    configuration: Configuration = Configuration("")
    exclusions: FrozenSet[ExclusionPair] = frozenset()
    transitive: bool = True
    classifier: str = ""
    type: str = ""

    model_config = ConfigDict(frozen=True)

    def with_transitive(self, transitive: bool) -> "Dependency":
        return self.model_copy(update={"transitive": transitive})

    def with_exclusions(self, exclusions: FrozenSet[ExclusionPair]) -> "Dependency":
        return self.model_copy(update={"exclusions": frozenset(exclusions)})

    def with_module_attributes(self, attributes: Mapping[str, str]) -> "Dependency":
        return self.model_copy(update={"module": self.module.with_attributes(attributes)})

    def __str__(self) -> str:
        text = f"{self.module}:{self.version}"
        if self.configuration:
            text += f":{self.configuration}"
        return text


DependencyEntry = Tuple[Dependency, ParameterMap]
DependencyEntries = List[DependencyEntry]
