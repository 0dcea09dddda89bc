"""Load the report input document (YAML or JSON).

    project: demo
    packages:
      npm:
        - {name: lodash, version: 4.17.21, source: package-lock.json}
    module_graph_file: modgraph.txt     # or module_graph: "a b@v1\\n..."
    vulnerabilities:
      lodash:
        - {id: CVE-2021-1, severity: HIGH, score: 7.5}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .models import Ecosystem, GraphInputs, PackageRef, Vulnerability

_ECOSYSTEM_ALIASES = {
    "go": Ecosystem.MODULE,
    "module": Ecosystem.MODULE,
    "npm": Ecosystem.NPM,
    "python": Ecosystem.PYTHON,
    "pypi": Ecosystem.PYTHON,
    "maven": Ecosystem.MAVEN,
}


def parse_ecosystem(value: str) -> Ecosystem:
    key = value.strip().lower()
    if key not in _ECOSYSTEM_ALIASES:
        raise ValueError(f"Unknown ecosystem '{value}' (expected one of: {', '.join(sorted(_ECOSYSTEM_ALIASES))})")
    return _ECOSYSTEM_ALIASES[key]


def _str(raw: dict[str, Any], key: str, *alts: str) -> str:
    for k in (key, *alts):
        value = raw.get(k)
        if value is not None:
            return str(value).strip()
    return ""


def _parse_package(raw: Any, ecosystem: Ecosystem, where: str) -> PackageRef:
    if isinstance(raw, str):
        return PackageRef(ecosystem=ecosystem.value, name=raw.strip())
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: package entries must be mappings or strings")
    name = _str(raw, "name")
    if not name:
        raise ValueError(f"{where}: package entry without a name")
    return PackageRef(
        ecosystem=ecosystem.value,
        name=name,
        version=_str(raw, "version"),
        source=_str(raw, "source"),
    )


def _parse_vulnerability(raw: Any, package: str) -> Vulnerability:
    if not isinstance(raw, dict):
        raise ValueError(f"vulnerabilities.{package}: entries must be mappings")
    vuln_id = _str(raw, "id")
    if not vuln_id:
        raise ValueError(f"vulnerabilities.{package}: entry without an id")
    try:
        score = float(raw.get("score") or 0.0)
    except (TypeError, ValueError) as e:
        raise ValueError(f"vulnerabilities.{package}.{vuln_id}: score must be a number") from e
    return Vulnerability(
        id=vuln_id,
        severity=_str(raw, "severity"),
        score=score,
        title=_str(raw, "title"),
        description=_str(raw, "description"),
        package=_str(raw, "package", "affected_package") or package,
        version=_str(raw, "version", "affected_version"),
    )


def parse_inputs(data: Any, *, base_dir: Path | None = None) -> GraphInputs:
    """Validate a decoded input document and convert it to typed records."""
    if not isinstance(data, dict):
        raise ValueError("Input document must be a mapping")

    project = _str(data, "project")
    if not project:
        raise ValueError("project is required")

    packages: dict[Ecosystem, list[PackageRef]] = {}
    raw_packages = data.get("packages") or {}
    if not isinstance(raw_packages, dict):
        raise ValueError("packages must be a mapping of ecosystem -> list")
    for eco_name, entries in raw_packages.items():
        ecosystem = parse_ecosystem(str(eco_name))
        if ecosystem == Ecosystem.MODULE:
            raise ValueError(f"packages.{eco_name}: modules are read from module_graph or module_graph_file")
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise ValueError(f"packages.{eco_name} must be a list")
        refs = packages.setdefault(ecosystem, [])
        refs.extend(_parse_package(e, ecosystem, f"packages.{eco_name}") for e in entries)

    module_graph = data.get("module_graph")
    if module_graph is not None and not isinstance(module_graph, str):
        raise ValueError("module_graph must be a string")
    graph_file = data.get("module_graph_file")
    if graph_file:
        path = Path(str(graph_file))
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        module_graph = read_module_graph(path)

    vulnerabilities: dict[str, list[Vulnerability]] = {}
    raw_vulns = data.get("vulnerabilities") or {}
    if not isinstance(raw_vulns, dict):
        raise ValueError("vulnerabilities must be a mapping of package -> list")
    for package, entries in raw_vulns.items():
        if not isinstance(entries, list):
            raise ValueError(f"vulnerabilities.{package} must be a list")
        vulnerabilities[str(package)] = [_parse_vulnerability(e, str(package)) for e in entries]

    return GraphInputs(
        project=project,
        packages=packages,
        module_graph=module_graph or None,
        vulnerabilities=vulnerabilities,
    )


def read_module_graph(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"Module graph file not found: {path}")
    return path.read_text(encoding="utf-8")


def load_inputs(path: Path) -> GraphInputs:
    """Load an input document; JSON is accepted as a YAML subset."""
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse input document {path}: {e}") from e
    return parse_inputs(data, base_dir=path.parent)


def inputs_to_document(inputs: GraphInputs) -> dict[str, Any]:
    """Inverse of `parse_inputs`, used to emit discovered packages."""
    doc: dict[str, Any] = {
        "project": inputs.project,
        "packages": {
            eco.value: [
                {"name": p.name, "version": p.version, "source": p.source} for p in refs
            ]
            for eco, refs in inputs.packages.items()
        },
    }
    if inputs.module_graph:
        doc["module_graph"] = inputs.module_graph
    doc["vulnerabilities"] = {
        name: [
            {
                "id": v.id,
                "severity": v.severity,
                "score": v.score,
                "title": v.title,
                "description": v.description,
                "package": v.package,
                "version": v.version,
            }
            for v in vulns
        ]
        for name, vulns in inputs.vulnerabilities.items()
    }
    return doc
