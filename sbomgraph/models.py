"""Data models for package references, vulnerabilities and graph elements."""

from dataclasses import dataclass, field
from enum import Enum


class Ecosystem(str, Enum):
    """Package universes a graph node can belong to."""

    PROJECT = "project"  # the scanned project itself (graph root)
    MODULE = "module"  # versioned modules from a module-graph dump
    NPM = "npm"
    PYTHON = "python"
    MAVEN = "maven"


# Ecosystems that arrive as flat direct-dependency lists, in build order.
DIRECT_ECOSYSTEMS = (Ecosystem.NPM, Ecosystem.PYTHON, Ecosystem.MAVEN)


@dataclass(frozen=True)
class PackageRef:
    """A package discovered in a project manifest or lockfile."""

    ecosystem: str
    name: str
    version: str = ""
    source: str = ""  # file the reference was read from


@dataclass(frozen=True)
class Vulnerability:
    """A known security issue reported for a package."""

    id: str
    severity: str = ""
    score: float = 0.0
    title: str = ""
    description: str = ""
    package: str = ""  # affected package name
    version: str = ""  # affected package version


@dataclass
class Node:
    """A package in the dependency graph."""

    id: str
    label: str  # display text, possibly truncated
    full_name: str
    ecosystem: Ecosystem
    color: str
    level: int = 0  # depth from the root
    x: float = 0.0
    y: float = 0.0
    vulnerable: bool = False

    @property
    def is_root(self) -> bool:
        return self.ecosystem == Ecosystem.PROJECT


@dataclass(frozen=True)
class Edge:
    """Directed dependency: source depends on target."""

    source: str
    target: str


@dataclass
class GraphInputs:
    """Everything the builder consumes for one report."""

    project: str
    packages: dict[Ecosystem, list[PackageRef]] = field(default_factory=dict)
    module_graph: str | None = None
    vulnerabilities: dict[str, list[Vulnerability]] = field(default_factory=dict)

    def packages_for(self, ecosystem: Ecosystem) -> list[PackageRef]:
        return self.packages.get(ecosystem) or []
