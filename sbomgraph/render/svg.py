"""Render a laid-out dependency graph as a standalone SVG document."""

from __future__ import annotations

import html
from pathlib import Path

from ..config import DEFAULT_SETTINGS, LEGEND_ITEMS, VULNERABLE_COLOR, LayoutConfig, RenderConfig, Settings
from ..graph.model import DependencyGraph
from ..models import Node

STYLE = """<defs>
    <style>
      .node { stroke: #30363d; stroke-width: 2.5; cursor: pointer; transition: all 0.2s; }
      .node:hover { stroke: #58a6ff; stroke-width: 4; }
      .node-label {
        fill: #e6edf3;
        font-family: 'SF Mono', 'Monaco', 'Consolas', monospace;
        font-size: 12px;
        text-anchor: middle;
        pointer-events: none;
        font-weight: 500;
      }
      .label-box { fill: #161b22; stroke: #30363d; stroke-width: 1; rx: 4; ry: 4; }
      .label-box:hover { fill: #1c2128; stroke: #58a6ff; }
      .edge { stroke: #30363d; stroke-width: 1.5; stroke-opacity: 0.4; fill: none; }
      .edge-vulnerable { stroke: #f85149; stroke-width: 2; stroke-opacity: 0.6; }
      .legend-text { fill: #8b949e; font-family: system-ui, sans-serif; font-size: 13px; }
      .title { fill: #7BEFB2; font-family: system-ui, sans-serif; font-size: 24px; font-weight: 600; }
      .subtitle { fill: #8b949e; font-family: system-ui, sans-serif; font-size: 14px; }
    </style>
  </defs>"""

BACKGROUND = "#0d1117"


def esc(s: str) -> str:
    """Escape & < > " ' for SVG text and attribute values."""
    return html.escape(s, quote=True).replace("&#x27;", "&apos;")


def canvas_size(graph: DependencyGraph, config: RenderConfig) -> tuple[int, int]:
    max_x, max_y = config.min_width, config.min_height
    for node in graph.iter_nodes():
        max_x = max(max_x, node.x)
        max_y = max(max_y, node.y)
    return int(max_x + config.canvas_padding), int(max_y + config.canvas_padding)


def node_tooltip(node: Node) -> str:
    name = node.full_name or node.label
    text = f"{name} ({node.ecosystem.value}) - Level {node.level}"
    if node.vulnerable:
        text += " ⚠️ HAS VULNERABILITIES"
    return text


def _edge_parts(graph: DependencyGraph) -> list[str]:
    parts: list[str] = []
    for edge in graph.iter_edges():
        src = graph.nodes[edge.source]
        dst = graph.nodes[edge.target]
        cls = "edge-vulnerable" if dst.vulnerable else "edge"
        parts.append(
            f'<line x1="{src.x:.2f}" y1="{src.y:.2f}" x2="{dst.x:.2f}" y2="{dst.y:.2f}" class="{cls}"/>'
        )
    return parts


def _node_parts(node: Node, layout: LayoutConfig, config: RenderConfig) -> list[str]:
    r = config.root_radius if node.is_root else config.node_radius
    box_w = layout.label_width(node.label)
    box_h = config.label_box_height
    box_x = node.x - box_w / 2
    box_y = node.y + r + config.label_box_offset
    return [
        f'<circle cx="{node.x:.2f}" cy="{node.y:.2f}" r="{r:.1f}" fill="{node.color}" class="node">'
        f"<title>{esc(node_tooltip(node))}</title></circle>",
        f'<rect x="{box_x:.2f}" y="{box_y:.2f}" width="{box_w:.2f}" height="{box_h:.2f}" class="label-box"/>',
        f'<text x="{node.x:.2f}" y="{(box_y + box_h / 2 + 4):.2f}" class="node-label">{esc(node.label)}</text>',
    ]


def _legend_parts(graph: DependencyGraph, config: RenderConfig) -> list[str]:
    lx, ly, row = config.legend_x, config.legend_y, config.legend_row_height
    parts = ['<g id="legend">']
    for i, (label, color) in enumerate(LEGEND_ITEMS):
        y = ly + i * row
        parts.append(
            f'<circle cx="{lx:.1f}" cy="{y:.1f}" r="6" fill="{color}"/>'
            f'<text x="{(lx + 18):.1f}" y="{(y + 5):.1f}" class="legend-text">{esc(label)}</text>'
        )
    parts.append("</g>")

    stats_y = ly + len(LEGEND_ITEMS) * row + 20
    parts.append(
        f'<text x="{lx:.1f}" y="{stats_y:.1f}" class="legend-text">'
        f"Total Dependencies: {graph.dependency_count}</text>"
    )
    parts.append(
        f'<text x="{lx:.1f}" y="{(stats_y + 18):.1f}" class="legend-text" '
        f'style="fill: {VULNERABLE_COLOR}; font-weight: 600;">Vulnerable: {graph.vulnerable_count}</text>'
    )
    return parts


def render_svg(graph: DependencyGraph, settings: Settings | None = None) -> str:
    """Render the graph; edges go before nodes so nodes sit on top.

    Output depends only on the graph and settings, so rendering the same graph
    twice yields identical text.
    """
    settings = settings or DEFAULT_SETTINGS
    config = settings.render
    width, height = canvas_size(graph, config)

    parts: list[str] = ['<?xml version="1.0" encoding="UTF-8"?>']
    parts.append(
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg" '
        f'xmlns:xlink="http://www.w3.org/1999/xlink">'
    )
    parts.append(STYLE)
    parts.append(f'<rect width="{width}" height="{height}" fill="{BACKGROUND}"/>')
    parts.append(f'<text x="20" y="35" class="title">{esc(config.title)}</text>')
    parts.append(f'<text x="20" y="55" class="subtitle">{esc(config.subtitle)}</text>')

    parts.append('<g id="edges">')
    parts.extend(_edge_parts(graph))
    parts.append("</g>")

    parts.append('<g id="nodes">')
    for node in graph.iter_nodes():
        parts.extend(_node_parts(node, settings.layout, config))
    parts.append("</g>")

    parts.extend(_legend_parts(graph, config))
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def write_svg(graph: DependencyGraph, path: Path, settings: Settings | None = None) -> Path:
    """Render and write the diagram; OSError from the write propagates."""
    path.write_text(render_svg(graph, settings), encoding="utf-8")
    return path
