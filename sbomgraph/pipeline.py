"""One report generation: build, level, lay out, render."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import DEFAULT_SETTINGS, Settings
from .graph.builder import build_from_inputs
from .graph.layout import layout_hierarchical
from .graph.levels import assign_levels
from .graph.model import DependencyGraph
from .models import GraphInputs
from .render.svg import write_svg

logger = logging.getLogger(__name__)


def prepare_graph(inputs: GraphInputs, settings: Settings | None = None) -> DependencyGraph:
    """Return a fresh, leveled and positioned graph for these inputs."""
    settings = settings or DEFAULT_SETTINGS
    graph = build_from_inputs(inputs, settings.builder)
    reached = assign_levels(graph)
    unreached = graph.node_count - len(reached)
    if unreached:
        logger.warning(f"{unreached} node(s) not reachable from the project root")
    layout_hierarchical(graph, settings.layout)
    return graph


def generate_dependency_graph(
    inputs: GraphInputs,
    output_path: Path,
    settings: Settings | None = None,
) -> DependencyGraph:
    """Write the SVG diagram to `output_path` and return the laid-out graph.

    Errors creating the output file propagate; nothing is cleaned up.
    """
    graph = prepare_graph(inputs, settings)
    write_svg(graph, output_path, settings)
    logger.info(
        f"Wrote dependency graph for {inputs.project} to {output_path} "
        f"({graph.dependency_count} dependencies, {graph.vulnerable_count} vulnerable)"
    )
    return graph
