from collections import deque

from sbomgraph.graph.builder import build_graph
from sbomgraph.graph.levels import assign_levels
from sbomgraph.models import Ecosystem, PackageRef


def _shortest_paths(graph, root_id: str) -> dict[str, int]:
    dist = {root_id: 0}
    queue = deque([root_id])
    while queue:
        cur = queue.popleft()
        for child in graph.children(cur):
            if child not in dist:
                dist[child] = dist[cur] + 1
                queue.append(child)
    return dist


def test_module_chain_levels() -> None:
    g = build_graph("modA", module_graph="modA modB@v1.0.0\nmodB@v1.0.0 modC@v2.0.0")
    assign_levels(g)

    assert g.root.level == 0
    assert g.get_node("module-modB-at-v1-0-0").level == 1
    assert g.get_node("module-modC-at-v2-0-0").level == 2


def test_shallowest_parent_wins() -> None:
    # c is reachable at depth 3 through a -> b -> c and at depth 1 directly.
    text = "\n".join(["demo a@v1", "a@v1 b@v1", "b@v1 c@v1", "demo c@v1"])
    g = build_graph("demo", module_graph=text)
    assign_levels(g)

    assert g.get_node("module-c-at-v1").level == 1
    assert g.get_node("module-b-at-v1").level == 2


def test_levels_equal_shortest_path_lengths() -> None:
    text = "\n".join(
        [
            "demo a@v1",
            "demo b@v1",
            "a@v1 c@v1",
            "b@v1 c@v1",
            "c@v1 d@v1",
            "d@v1 a@v1",
            "b@v1 e@v1",
            "e@v1 d@v1",
        ]
    )
    g = build_graph("demo", packages={Ecosystem.NPM: [PackageRef("npm", "left-pad")]}, module_graph=text)
    visited = assign_levels(g)

    expected = _shortest_paths(g, g.root_id)
    assert visited == set(expected)
    for node_id, dist in expected.items():
        assert g.get_node(node_id).level == dist


def test_unreachable_nodes_keep_their_level() -> None:
    g = build_graph("demo", module_graph="demo a@v1\nx@v1 y@v1")
    visited = assign_levels(g)

    assert "module-x-at-v1" not in visited
    assert g.get_node("module-x-at-v1").level == 0
    assert g.get_node("module-y-at-v1").level == 0
    assert g.get_node("module-a-at-v1").level == 1
