"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from sbomgraph.models import Ecosystem, GraphInputs, PackageRef, Vulnerability


@pytest.fixture
def lodash_vuln() -> Vulnerability:
    return Vulnerability(id="CVE-2021-1", severity="HIGH", score=7.5, title="Prototype pollution")


@pytest.fixture
def demo_inputs(lodash_vuln: Vulnerability) -> GraphInputs:
    """Root `demo` with a single vulnerable npm dependency."""
    return GraphInputs(
        project="demo",
        packages={Ecosystem.NPM: [PackageRef("npm", "lodash", "4.17.21", "package-lock.json")]},
        vulnerabilities={"lodash": [lodash_vuln]},
    )


@pytest.fixture
def input_document(tmp_path: Path) -> Path:
    """Input document on disk mirroring `demo_inputs`."""
    path = tmp_path / "inputs.yaml"
    path.write_text(
        "\n".join(
            [
                "project: demo",
                "packages:",
                "  npm:",
                "    - {name: lodash, version: 4.17.21, source: package-lock.json}",
                "  python:",
                "    - {name: requests, version: 2.31.0}",
                "vulnerabilities:",
                "  lodash:",
                "    - {id: CVE-2021-1, severity: HIGH, score: 7.5}",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path
