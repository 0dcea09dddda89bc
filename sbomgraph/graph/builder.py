"""Build a dependency graph from discovered packages and a module-graph dump."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from ..config import (
    DEFAULT_COLOR,
    DEFAULT_SETTINGS,
    ECOSYSTEM_COLORS,
    ROOT_COLOR,
    VULNERABLE_COLOR,
    BuilderConfig,
)
from ..models import DIRECT_ECOSYSTEMS, Ecosystem, GraphInputs, Node, PackageRef, Vulnerability
from .model import DependencyGraph

logger = logging.getLogger(__name__)

_ID_REPLACEMENTS = (
    ("/", "-"),
    (".", "-"),
    ("@", "-at-"),
    (" ", "-"),
    (":", "-"),
)


def sanitize_id(raw: str) -> str:
    """Normalize special characters so a raw name can serve as a node id."""
    for old, new in _ID_REPLACEMENTS:
        raw = raw.replace(old, new)
    return raw


def node_id(ecosystem: Ecosystem, name: str) -> str:
    return sanitize_id(f"{ecosystem.value}-{name}")


def truncate(text: str, max_len: int) -> str:
    """Shorten a label, preferring to cut at a path separator."""
    if len(text) <= max_len:
        return text
    idx = text[: max_len - 3].rfind("/")
    if idx > max_len // 2:
        return "..." + text[idx:max_len]
    return text[: max_len - 3] + "..."


def strip_version(token: str) -> str:
    """`github.com/foo/bar@v1.2.3` -> `github.com/foo/bar`."""
    idx = token.find("@")
    return token[:idx] if idx != -1 else token


def color_for(ecosystem: Ecosystem, vulnerable: bool) -> str:
    if vulnerable:
        return VULNERABLE_COLOR
    return ECOSYSTEM_COLORS.get(ecosystem, DEFAULT_COLOR)


def _strip_prefixes(name: str, prefixes: Sequence[str]) -> str:
    for prefix in prefixes:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return name


def has_vulnerability(
    package: str,
    vulnerabilities: Mapping[str, Sequence[Vulnerability]],
    host_prefixes: Sequence[str] = DEFAULT_SETTINGS.builder.host_prefixes,
) -> bool:
    """Fuzzy-match a package name against the vulnerability map keys.

    Case-insensitive substring match in either direction; the package with its
    hosting prefix stripped may also contain the stripped key. Approximate:
    `log` matches `logrus`.
    """
    pkg_lower = package.lower()
    pkg_clean = _strip_prefixes(pkg_lower, host_prefixes)

    for key, vulns in vulnerabilities.items():
        if not vulns:
            continue
        key_lower = key.lower()
        key_clean = _strip_prefixes(key_lower, host_prefixes)
        if (
            key_lower in pkg_lower
            or pkg_lower in key_lower
            or key_clean in pkg_clean
        ):
            return True
    return False


class GraphBuilder:
    """Populates one DependencyGraph for one project."""

    def __init__(
        self,
        project: str,
        vulnerabilities: Mapping[str, Sequence[Vulnerability]] | None = None,
        config: BuilderConfig | None = None,
    ) -> None:
        self.project = project
        self.vulnerabilities = vulnerabilities or {}
        self.config = config or DEFAULT_SETTINGS.builder
        self.graph = DependencyGraph()
        self.root_id = node_id(Ecosystem.PROJECT, project)
        self.graph.add_node(
            Node(
                id=self.root_id,
                label=truncate(project, self.config.label_max),
                full_name=project,
                ecosystem=Ecosystem.PROJECT,
                color=ROOT_COLOR,
                level=0,
            )
        )

    def _is_vulnerable(self, name: str) -> bool:
        return has_vulnerability(name, self.vulnerabilities, self.config.host_prefixes)

    def add_direct(self, ecosystem: Ecosystem, packages: Iterable[PackageRef]) -> int:
        """Attach direct dependencies to the root; returns how many nodes were new."""
        added = 0
        for pkg in packages:
            nid = node_id(ecosystem, pkg.name)
            if self.graph.has_node(nid):
                continue
            vulnerable = self._is_vulnerable(pkg.name)
            self.graph.add_node(
                Node(
                    id=nid,
                    label=truncate(pkg.name, self.config.label_max),
                    full_name=pkg.name,
                    ecosystem=ecosystem,
                    color=color_for(ecosystem, vulnerable),
                    level=1,
                    vulnerable=vulnerable,
                )
            )
            self.graph.add_edge(self.root_id, nid)
            added += 1
        return added

    def _is_root_token(self, token: str) -> bool:
        if "@" not in token:
            return True
        name = strip_version(token)
        return name == self.project or name.startswith(self.project + "/")

    def _ensure_module_node(self, token: str) -> str:
        nid = node_id(Ecosystem.MODULE, token)
        if not self.graph.has_node(nid):
            name = strip_version(token)
            vulnerable = self._is_vulnerable(name)
            self.graph.add_node(
                Node(
                    id=nid,
                    label=truncate(name, self.config.module_label_max),
                    full_name=token,
                    ecosystem=Ecosystem.MODULE,
                    color=color_for(Ecosystem.MODULE, vulnerable),
                    vulnerable=vulnerable,
                )
            )
        return nid

    def add_module_graph(self, text: str) -> int:
        """Add `from to` edges from a module-graph dump; returns edges added."""
        added = 0
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != 2:
                logger.debug(f"Skipping malformed module-graph line {lineno}: {line!r}")
                continue

            source_token, target_token = parts
            target = self._ensure_module_node(target_token)
            if self._is_root_token(source_token):
                source = self.root_id
            else:
                source = self._ensure_module_node(source_token)
            self.graph.add_edge(source, target)
            added += 1
        return added


def build_graph(
    project: str,
    packages: Mapping[Ecosystem, Sequence[PackageRef]] | None = None,
    module_graph: str | None = None,
    vulnerabilities: Mapping[str, Sequence[Vulnerability]] | None = None,
    config: BuilderConfig | None = None,
) -> DependencyGraph:
    """Create the root node, then module-graph edges, then direct dependencies.

    Levels and positions are left at their defaults; run `assign_levels` and
    `layout_hierarchical` afterwards.
    """
    builder = GraphBuilder(project, vulnerabilities, config)
    packages = packages or {}

    if module_graph:
        builder.add_module_graph(module_graph)
    if packages.get(Ecosystem.MODULE):
        logger.warning(
            f"Ignoring {len(packages[Ecosystem.MODULE])} module package(s); modules come from the module graph"
        )

    for ecosystem in DIRECT_ECOSYSTEMS:
        builder.add_direct(ecosystem, packages.get(ecosystem) or [])

    graph = builder.graph
    logger.debug(f"Built graph for {project}: {graph.node_count} nodes, {graph.edge_count} edges")
    return graph


def build_from_inputs(inputs: GraphInputs, config: BuilderConfig | None = None) -> DependencyGraph:
    return build_graph(
        inputs.project,
        packages=inputs.packages,
        module_graph=inputs.module_graph,
        vulnerabilities=inputs.vulnerabilities,
        config=config,
    )
