"""Best-effort discovery of direct dependencies from project manifests.

Only local files are read. Each reader returns an empty list when its
manifests are absent; unreadable files are logged and skipped.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from .models import Ecosystem, GraphInputs, PackageRef

logger = logging.getLogger(__name__)

NPM_LOCKFILES = ("package-lock.json", "npm-shrinkwrap.json")
PYTHON_REQUIREMENTS = ("requirements.txt", "requirements-dev.txt")
PYTHON_MARKER_FILES = ("pyproject.toml", "Pipfile")

# Checked in order; the first separator found splits name from version.
_VERSION_SEPARATORS = ("==", ">=", "<=", "~=", ">", "<")


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read {path}: {e}")
        return None


def discover_npm(project_dir: Path) -> list[PackageRef]:
    """Top-level `dependencies` of npm lockfiles, sorted by name."""
    refs: list[PackageRef] = []
    for lockfile in NPM_LOCKFILES:
        text = _read_text(project_dir / lockfile)
        if text is None:
            continue
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed {lockfile}: {e}")
            continue
        deps = data.get("dependencies") if isinstance(data, dict) else None
        if not isinstance(deps, dict):
            continue
        for name, meta in deps.items():
            version = meta.get("version", "") if isinstance(meta, dict) else ""
            refs.append(PackageRef(Ecosystem.NPM.value, name, str(version or ""), lockfile))
    refs.sort(key=lambda r: r.name)
    return refs


def split_requirement(line: str) -> tuple[str, str]:
    """`requests==2.31.0` -> (`requests`, `2.31.0`); bare names get no version."""
    for sep in _VERSION_SEPARATORS:
        idx = line.find(sep)
        if idx >= 0:
            return line[:idx].strip(), line[idx + len(sep):].strip()
    return line.strip(), ""


def discover_python(project_dir: Path) -> list[PackageRef]:
    refs: list[PackageRef] = []
    for filename in PYTHON_REQUIREMENTS:
        text = _read_text(project_dir / filename)
        if text is None:
            continue
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            name, version = split_requirement(line)
            if name:
                refs.append(PackageRef(Ecosystem.PYTHON.value, name, version, filename))
    for filename in PYTHON_MARKER_FILES:
        if (project_dir / filename).exists():
            # Not parsed; the entry points readers at the file.
            refs.append(PackageRef(Ecosystem.PYTHON.value, "(see file)", "", filename))
    return refs


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(elem: ET.Element, name: str) -> str:
    for child in elem:
        if _local(child.tag) == name:
            return (child.text or "").strip()
    return ""


def discover_maven(project_dir: Path) -> list[PackageRef]:
    """`groupId:artifactId` of each `<dependencies><dependency>` in pom.xml."""
    pom = project_dir / "pom.xml"
    text = _read_text(pom)
    if text is None:
        return []
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.warning(f"Could not parse {pom}: {e}")
        return [PackageRef(Ecosystem.MAVEN.value, "(see pom.xml)", "", "pom.xml")]

    refs: list[PackageRef] = []
    for section in root:
        if _local(section.tag) != "dependencies":
            continue
        for dep in section:
            if _local(dep.tag) != "dependency":
                continue
            name = f"{_child_text(dep, 'groupId')}:{_child_text(dep, 'artifactId')}".strip()
            refs.append(PackageRef(Ecosystem.MAVEN.value, name, _child_text(dep, "version"), "pom.xml"))
    return refs


def discover_packages(project_dir: Path) -> dict[Ecosystem, list[PackageRef]]:
    return {
        Ecosystem.NPM: discover_npm(project_dir),
        Ecosystem.PYTHON: discover_python(project_dir),
        Ecosystem.MAVEN: discover_maven(project_dir),
    }


def discover_inputs(project_dir: Path, project: str | None = None) -> GraphInputs:
    """Input skeleton for a project directory; vulnerabilities are left empty."""
    project_dir = project_dir.resolve()
    return GraphInputs(
        project=project or project_dir.name,
        packages={eco: refs for eco, refs in discover_packages(project_dir).items() if refs},
    )
