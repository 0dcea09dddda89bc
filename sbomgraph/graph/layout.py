"""Hierarchical tree layout.

Two passes over a leveled graph:

1. Bottom-up, deepest level first: each node's subtree width is the sum of
   its children's widths, never narrower than its own label box plus the
   minimum horizontal spacing.
2. Top-down: roots (level 0) are laid side by side from `root_x_offset`;
   each node places its not-yet-positioned children left to right, each
   centred in its own subtree width, one `vertical_spacing` below.

The graph may be a DAG. A child reached again through a later parent keeps
its first position, so the visible layout is a spanning tree; the extra
edges are still drawn by the renderer.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterator

from ..config import DEFAULT_SETTINGS, LayoutConfig
from .model import DependencyGraph


@dataclass
class _Frame:
    children: Iterator[str]
    cursor_x: float  # left bound for the next child
    y: float  # row the children go on


def compute_subtree_widths(graph: DependencyGraph, config: LayoutConfig) -> dict[str, float]:
    by_level: dict[int, list[str]] = defaultdict(list)
    for node in graph.iter_nodes():
        by_level[node.level].append(node.id)

    widths: dict[str, float] = {}
    for level in sorted(by_level, reverse=True):
        for nid in by_level[level]:
            own = config.label_width(graph.nodes[nid].label) + config.min_horizontal_spacing
            children = graph.children(nid)
            if not children:
                widths[nid] = own
                continue
            # Children on the same or a shallower level are not computed yet and count as 0.
            total = sum(widths.get(child, 0.0) for child in children)
            widths[nid] = max(total, own)
    return widths


def _place_descendants(
    graph: DependencyGraph,
    start_id: str,
    left: float,
    y: float,
    widths: dict[str, float],
    positioned: set[str],
    vertical_spacing: float,
) -> None:
    stack = [_Frame(iter(graph.children(start_id)), left, y)]
    while stack:
        frame = stack[-1]
        child_id = next(frame.children, None)
        if child_id is None:
            stack.pop()
            continue
        if child_id in positioned:
            continue
        child = graph.get_node(child_id)
        if child is None:
            continue

        width = widths.get(child_id, 0.0)
        child.x = frame.cursor_x + width / 2
        child.y = frame.y
        positioned.add(child_id)

        child_left = frame.cursor_x
        frame.cursor_x += width
        stack.append(_Frame(iter(graph.children(child_id)), child_left, frame.y + vertical_spacing))


def layout_hierarchical(graph: DependencyGraph, config: LayoutConfig | None = None) -> dict[str, float]:
    """Assign x/y to every node reachable from a level-0 node.

    Returns the computed subtree widths keyed by node id.
    """
    config = config or DEFAULT_SETTINGS.layout
    if graph.node_count == 0:
        return {}

    widths = compute_subtree_widths(graph, config)
    positioned: set[str] = set()

    current_x = config.root_x_offset
    for node in list(graph.iter_nodes()):
        if node.level != 0:
            continue
        width = widths[node.id]
        node.x = current_x + width / 2
        node.y = config.start_y
        positioned.add(node.id)
        _place_descendants(
            graph,
            node.id,
            current_x,
            config.start_y + config.vertical_spacing,
            widths,
            positioned,
            config.vertical_spacing,
        )
        current_x += width + config.min_horizontal_spacing

    return widths
