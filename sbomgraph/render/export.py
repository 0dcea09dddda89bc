"""Dict, JSON and Markdown views of a laid-out graph for report templates."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any

from ..graph.model import DependencyGraph
from ..models import Ecosystem


def graph_to_dict(graph: DependencyGraph) -> dict[str, Any]:
    return {
        "root": graph.root_id,
        "nodes": [
            {
                "id": n.id,
                "label": n.label,
                "full_name": n.full_name,
                "ecosystem": n.ecosystem.value,
                "level": n.level,
                "x": round(n.x, 2),
                "y": round(n.y, 2),
                "color": n.color,
                "vulnerable": n.vulnerable,
            }
            for n in graph.iter_nodes()
        ],
        "edges": [{"source": e.source, "target": e.target} for e in graph.iter_edges()],
        "stats": summarize(graph),
    }


def graph_to_json(graph: DependencyGraph) -> str:
    return json.dumps(graph_to_dict(graph), indent=2) + "\n"


def summarize(graph: DependencyGraph) -> dict[str, Any]:
    by_ecosystem = Counter(n.ecosystem.value for n in graph.iter_nodes() if not n.is_root)
    vulnerable = Counter(n.ecosystem.value for n in graph.iter_nodes() if n.vulnerable)
    return {
        "total_dependencies": graph.dependency_count,
        "vulnerable": graph.vulnerable_count,
        "edges": graph.edge_count,
        "max_level": graph.max_level,
        "by_ecosystem": {
            eco.value: {"total": by_ecosystem.get(eco.value, 0), "vulnerable": vulnerable.get(eco.value, 0)}
            for eco in Ecosystem
            if eco != Ecosystem.PROJECT
        },
    }


def summary_to_markdown(project: str, stats: dict[str, Any]) -> str:
    lines: list[str] = []
    lines.append(f"## Dependency graph: {project}")
    lines.append("")
    lines.append(f"- Total dependencies: {stats['total_dependencies']}")
    lines.append(f"- Vulnerable: {stats['vulnerable']}")
    lines.append(f"- Edges: {stats['edges']}")
    lines.append(f"- Depth: {stats['max_level']}")
    lines.append("")
    lines.append("| Ecosystem | Packages | Vulnerable |")
    lines.append("|---|---:|---:|")
    for eco, row in stats["by_ecosystem"].items():
        lines.append(f"| {eco} | {row['total']} | {row['vulnerable']} |")
    return "\n".join(lines).rstrip() + "\n"
