from sbomgraph.config import BuilderConfig, ECOSYSTEM_COLORS, ROOT_COLOR, VULNERABLE_COLOR
from sbomgraph.graph.builder import (
    build_from_inputs,
    build_graph,
    has_vulnerability,
    sanitize_id,
    strip_version,
    truncate,
)
from sbomgraph.models import Ecosystem, GraphInputs, PackageRef, Vulnerability

VULN = Vulnerability(id="CVE-2024-0001", severity="CRITICAL", score=9.8)


def _npm(*names: str) -> list[PackageRef]:
    return [PackageRef("npm", n, "1.0.0", "package-lock.json") for n in names]


def test_lodash_scenario(demo_inputs: GraphInputs) -> None:
    g = build_from_inputs(demo_inputs)

    assert g.node_count == 2
    assert g.edge_count == 1
    lodash = g.get_node("npm-lodash")
    assert lodash is not None
    assert lodash.vulnerable
    assert lodash.color == VULNERABLE_COLOR
    assert lodash.level == 1
    assert g.children("project-demo") == ["npm-lodash"]


def test_root_node() -> None:
    g = build_graph("my.service")
    root = g.root

    assert root.id == "project-my-service"
    assert root.ecosystem == Ecosystem.PROJECT
    assert root.color == ROOT_COLOR
    assert root.level == 0
    assert g.node_count == 1
    assert g.edge_count == 0


def test_empty_and_missing_lists_add_nothing() -> None:
    g = build_graph("demo", packages={Ecosystem.NPM: [], Ecosystem.PYTHON: []}, module_graph="")
    assert g.node_count == 1
    assert g.edge_count == 0


def test_duplicates_are_collapsed() -> None:
    g = build_graph(
        "demo",
        packages={
            Ecosystem.NPM: _npm("react", "react", "vue"),
            Ecosystem.PYTHON: [PackageRef("python", "react"), PackageRef("python", "flask")],
        },
    )

    # npm react and python react are different packages
    assert [n.id for n in g.iter_nodes()] == [
        "project-demo",
        "npm-react",
        "npm-vue",
        "python-react",
        "python-flask",
    ]
    assert g.edge_count == 4


def test_ecosystem_colors() -> None:
    g = build_graph(
        "demo",
        packages={
            Ecosystem.NPM: _npm("react"),
            Ecosystem.PYTHON: [PackageRef("python", "flask")],
            Ecosystem.MAVEN: [PackageRef("maven", "org.slf4j:slf4j-api")],
        },
    )
    assert g.get_node("npm-react").color == ECOSYSTEM_COLORS[Ecosystem.NPM]
    assert g.get_node("python-flask").color == ECOSYSTEM_COLORS[Ecosystem.PYTHON]
    assert g.get_node("maven-org-slf4j-slf4j-api").color == ECOSYSTEM_COLORS[Ecosystem.MAVEN]


def test_module_graph_scenario() -> None:
    g = build_graph("modA", module_graph="modA modB@v1.0.0\nmodB@v1.0.0 modC@v2.0.0")

    assert g.node_count == 3
    assert [(e.source, e.target) for e in g.iter_edges()] == [
        ("project-modA", "module-modB-at-v1-0-0"),
        ("module-modB-at-v1-0-0", "module-modC-at-v2-0-0"),
    ]
    modb = g.get_node("module-modB-at-v1-0-0")
    assert modb.label == "modB"
    assert modb.full_name == "modB@v1.0.0"
    assert modb.ecosystem == Ecosystem.MODULE


def test_module_graph_source_matching_project_is_root() -> None:
    text = "example.com/svc@v0.0.0 github.com/pkg/errors@v0.9.1\n"
    g = build_graph("example.com/svc", module_graph=text)

    assert g.node_count == 2
    assert g.children(g.root_id) == ["module-github-com-pkg-errors-at-v0-9-1"]


def test_module_graph_skips_malformed_lines() -> None:
    text = "\n".join(
        [
            "modA modB@v1",
            "just-one-token",
            "a b c",
            "",
            "   ",
            "modB@v1 modC@v1",
        ]
    )
    g = build_graph("modA", module_graph=text)
    assert g.node_count == 3
    assert g.edge_count == 2


def test_module_nodes_come_before_direct_dependencies() -> None:
    g = build_graph("demo", packages={Ecosystem.NPM: _npm("react")}, module_graph="demo golang.org/x/net@v0.1.0")
    assert [n.id for n in g.iter_nodes()] == ["project-demo", "module-golang-org-x-net-at-v0-1-0", "npm-react"]


def test_every_edge_endpoint_exists() -> None:
    text = "demo a@v1\na@v1 b@v1\nc@v1 d@v1\nb@v1 a@v1\n"
    g = build_graph("demo", packages={Ecosystem.NPM: _npm("x")}, module_graph=text)
    for edge in g.iter_edges():
        assert g.has_node(edge.source)
        assert g.has_node(edge.target)
    for source, children in g.adjacency.items():
        assert g.has_node(source)
        assert all(g.has_node(c) for c in children)


def test_module_vulnerability_uses_name_without_version() -> None:
    g = build_graph(
        "demo",
        module_graph="demo github.com/gin-gonic/gin@v1.6.0",
        vulnerabilities={"gin-gonic/gin": [VULN]},
    )
    assert g.get_node("module-github-com-gin-gonic-gin-at-v1-6-0").vulnerable


def test_sanitize_id() -> None:
    assert sanitize_id("npm-@babel/core") == "npm--at-babel-core"
    assert sanitize_id("maven-org.apache:commons lang") == "maven-org-apache-commons-lang"


def test_strip_version() -> None:
    assert strip_version("github.com/foo/bar@v1.2.3") == "github.com/foo/bar"
    assert strip_version("github.com/foo/bar") == "github.com/foo/bar"


def test_truncate() -> None:
    assert truncate("lodash", 40) == "lodash"
    assert truncate("x" * 40, 40) == "x" * 40
    # Cut at the last separator when it sits past the midpoint.
    assert truncate("abcdefghijklmnopqrstuvwxyz/0123456789abcdef", 40) == ".../0123456789abc"
    # Otherwise keep the head.
    long_name = "github.com/very-long-organisation-name/some-package-name"
    assert truncate(long_name, 40) == long_name[:37] + "..."


def test_labels_use_configured_budgets() -> None:
    name = "a" * 45
    g = build_graph(
        "demo",
        packages={Ecosystem.NPM: _npm(name)},
        module_graph=f"demo {name}@v1",
        config=BuilderConfig(label_max=40, module_label_max=50),
    )
    assert g.get_node(f"npm-{name}").label == "a" * 37 + "..."
    assert g.get_node(f"module-{name}-at-v1").label == name


def test_has_vulnerability_matching() -> None:
    vulns = {"lodash": [VULN]}
    assert has_vulnerability("lodash", vulns)
    assert has_vulnerability("LoDash", vulns)
    assert has_vulnerability("lodash.merge", vulns)
    assert not has_vulnerability("react", vulns)


def test_has_vulnerability_key_contains_package() -> None:
    assert has_vulnerability("yaml", {"github.com/go-yaml/yaml": [VULN]})


def test_has_vulnerability_strips_host_prefixes_on_both_sides() -> None:
    assert has_vulnerability("gitlab.com/acme/widgets", {"github.com/acme/widgets": [VULN]})


def test_has_vulnerability_ignores_empty_lists() -> None:
    assert not has_vulnerability("lodash", {"lodash": []})


def test_has_vulnerability_is_approximate() -> None:
    # Substring matches are accepted even for unrelated packages.
    assert has_vulnerability("logrus", {"log": [VULN]})


def test_module_graph_project_prefix_needs_path_boundary() -> None:
    g = build_graph("lib", module_graph="lib a@v1\nlibrary@v2 b@v1\nlib/sub@v0 c@v1\n")

    assert g.has_node("module-library-at-v2")
    assert g.children("module-library-at-v2") == ["module-b-at-v1"]
    assert g.children(g.root_id) == ["module-a-at-v1", "module-c-at-v1"]


def test_has_vulnerability_stripped_package_not_matched_inside_key() -> None:
    assert not has_vulnerability("github.com/foo", {"foobar": [VULN]})


def test_module_packages_are_ignored_with_warning(caplog) -> None:
    with caplog.at_level("WARNING", logger="sbomgraph.graph.builder"):
        g = build_graph("p", packages={Ecosystem.MODULE: [PackageRef("module", "github.com/x/y")]})

    assert g.node_count == 1
    assert "module graph" in caplog.text
