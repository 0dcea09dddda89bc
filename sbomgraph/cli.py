"""CLI entrypoint for sbomgraph."""

import logging
import sys
from pathlib import Path

import click

from . import __version__


def _fail(e: Exception) -> click.ClickException:
    return click.ClickException(str(e))


@click.group()
@click.version_option(__version__, prog_name="sbomgraph")
@click.option("--verbose", "-V", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """sbomgraph - dependency graph diagrams for SBOM reports.

    Lay out discovered packages as a tree under the project and highlight
    those with known vulnerabilities.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["svg", "html", "json", "md", "rich"]),
    default="svg",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file overriding layout/render settings",
)
@click.option(
    "--modgraph",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Module graph dump (`go mod graph` output); '-' reads stdin",
)
@click.option("--title", type=str, default=None, help="Diagram title")
def render(
    input_path: Path,
    fmt: str,
    out: Path | None,
    config_path: Path | None,
    modgraph,
    title: str | None,
) -> None:
    """Render the dependency graph of an input document."""
    from .commands.graph_cmd import run_render

    module_graph = modgraph.read() if modgraph is not None else None
    try:
        exit_code = run_render(
            input_path,
            fmt=fmt,
            out=out,
            config_path=config_path,
            module_graph=module_graph,
            title=title,
        )
    except (ValueError, OSError) as e:
        raise _fail(e) from e
    sys.exit(exit_code)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file overriding layout/render settings",
)
def summary(input_path: Path, config_path: Path | None) -> None:
    """Show package counts per ecosystem; exits 1 when anything is vulnerable."""
    from .commands.graph_cmd import run_summary

    try:
        exit_code = run_summary(input_path, config_path=config_path)
    except (ValueError, OSError) as e:
        raise _fail(e) from e
    sys.exit(exit_code)


@cli.command()
@click.argument(
    "project_dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=".",
)
@click.option("--project", type=str, default=None, help="Project name (defaults to the directory name)")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
def discover(project_dir: Path, project: str | None, fmt: str, out: Path | None) -> None:
    """Collect direct dependencies from manifests into an input document."""
    from .commands.graph_cmd import run_discover

    try:
        exit_code = run_discover(project_dir, project=project, fmt=fmt, out=out)
    except OSError as e:
        raise _fail(e) from e
    sys.exit(exit_code)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
