"""Graph commands - render, summarize and discover dependency graphs."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import yaml
from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_SETTINGS, Settings, load_config
from ..discover import discover_inputs
from ..inputs import inputs_to_document, load_inputs
from ..pipeline import prepare_graph
from ..render.export import graph_to_json, summarize, summary_to_markdown
from ..render.html import wrap_html
from ..render.svg import render_svg


def _settings(config_path: Path | None, title: str | None) -> Settings:
    settings = load_config(config_path) if config_path else DEFAULT_SETTINGS
    if title:
        settings = replace(settings, render=replace(settings.render, title=title))
    return settings


def _emit(text: str, out: Path | None, console: Console, what: str) -> None:
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {what} to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def run_render(
    input_path: Path,
    *,
    fmt: str = "svg",
    out: Path | None = None,
    config_path: Path | None = None,
    module_graph: str | None = None,
    title: str | None = None,
) -> int:
    """Render the dependency graph described by an input document."""
    console = Console(stderr=True)

    inputs = load_inputs(input_path)
    if module_graph is not None:
        inputs.module_graph = module_graph
    settings = _settings(config_path, title)
    graph = prepare_graph(inputs, settings)

    if fmt == "rich":
        _print_rich(inputs.project, summarize(graph), console=Console())
        return 0

    text: str
    if fmt == "json":
        text = graph_to_json(graph)
    elif fmt == "md":
        text = summary_to_markdown(inputs.project, summarize(graph))
    elif fmt == "html":
        text = wrap_html(render_svg(graph, settings), title=f"{settings.render.title}: {inputs.project}")
    else:
        text = render_svg(graph, settings)

    _emit(text, out, console, "dependency graph")
    if graph.vulnerable_count:
        console.print(f"{graph.vulnerable_count} vulnerable package(s) highlighted", style="red")
    return 0


def run_summary(input_path: Path, *, config_path: Path | None = None) -> int:
    """Print per-ecosystem package and vulnerability counts."""
    inputs = load_inputs(input_path)
    graph = prepare_graph(inputs, _settings(config_path, None))
    stats = summarize(graph)
    _print_rich(inputs.project, stats, console=Console())
    return 1 if stats["vulnerable"] else 0


def run_discover(project_dir: Path, *, project: str | None = None, fmt: str = "yaml", out: Path | None = None) -> int:
    """Write an input document skeleton from the manifests found in a directory."""
    console = Console(stderr=True)
    inputs = discover_inputs(project_dir, project)
    doc = inputs_to_document(inputs)

    if fmt == "json":
        text = json.dumps(doc, indent=2) + "\n"
    else:
        text = yaml.safe_dump(doc, sort_keys=False)

    _emit(text, out, console, "input document")
    total = sum(len(refs) for refs in inputs.packages.values())
    console.print(f"Discovered {total} package(s) in {project_dir}")
    return 0


def _print_rich(project: str, stats: dict, *, console: Console) -> None:
    console.print(f"[bold]Dependency graph: {project}[/bold]")
    console.print(
        f"Dependencies: {stats['total_dependencies']}  Edges: {stats['edges']}  Depth: {stats['max_level']}"
    )
    console.print()

    t = Table(title="Packages by ecosystem", show_header=True, header_style="bold")
    t.add_column("Ecosystem", style="cyan", no_wrap=True)
    t.add_column("Packages", justify="right")
    t.add_column("Vulnerable", justify="right")
    for eco, row in stats["by_ecosystem"].items():
        vulnerable = str(row["vulnerable"])
        t.add_row(eco, str(row["total"]), f"[red]{vulnerable}[/red]" if row["vulnerable"] else vulnerable)
    console.print(t)

    style = "red" if stats["vulnerable"] else "green"
    console.print(f"Vulnerable: {stats['vulnerable']}", style=style)
