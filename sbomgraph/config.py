"""Layout, render and builder settings.

Every pixel constant used by the layout and the SVG renderer lives here so the
spacing contract can be audited and overridden from a TOML file:

    [layout]
    vertical_spacing = 200

    [render]
    title = "Payments service"

    [builder]
    label_max = 32
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from .models import Ecosystem

ROOT_COLOR = "#7BEFB2"
VULNERABLE_COLOR = "#f85149"
DEFAULT_COLOR = "#8b949e"

ECOSYSTEM_COLORS: dict[Ecosystem, str] = {
    Ecosystem.PROJECT: ROOT_COLOR,
    Ecosystem.MODULE: "#00ADD8",
    Ecosystem.NPM: "#CB3837",
    Ecosystem.PYTHON: "#3776AB",
    Ecosystem.MAVEN: "#B07219",
}

# (label, color) pairs in legend order.
LEGEND_ITEMS: tuple[tuple[str, str], ...] = (
    ("Project Root", ROOT_COLOR),
    ("Go Module", ECOSYSTEM_COLORS[Ecosystem.MODULE]),
    ("NPM Package", ECOSYSTEM_COLORS[Ecosystem.NPM]),
    ("Python Package", ECOSYSTEM_COLORS[Ecosystem.PYTHON]),
    ("Maven Dependency", ECOSYSTEM_COLORS[Ecosystem.MAVEN]),
    ("Has Vulnerabilities", VULNERABLE_COLOR),
)


@dataclass(frozen=True)
class LayoutConfig:
    min_horizontal_spacing: float = 30.0  # gap between neighbouring label boxes
    vertical_spacing: float = 180.0  # distance between levels
    start_y: float = 100.0
    root_x_offset: float = 300.0  # keeps roots clear of the legend
    char_width: float = 7.0  # 12px monospace estimate
    label_padding: float = 12.0

    def label_width(self, label: str) -> float:
        """Estimated width of a node's label box."""
        return len(label) * self.char_width + self.label_padding


@dataclass(frozen=True)
class RenderConfig:
    min_width: float = 1000.0
    min_height: float = 800.0
    canvas_padding: float = 150.0
    root_radius: float = 16.0
    node_radius: float = 10.0
    label_box_height: float = 20.0
    label_box_offset: float = 8.0
    legend_x: float = 20.0
    legend_y: float = 85.0
    legend_row_height: float = 22.0
    title: str = "Dependency Graph"
    subtitle: str = "Transitive dependency visualization"


@dataclass(frozen=True)
class BuilderConfig:
    label_max: int = 40
    module_label_max: int = 50
    host_prefixes: tuple[str, ...] = ("github.com/", "gitlab.com/")


@dataclass(frozen=True)
class Settings:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    builder: BuilderConfig = field(default_factory=BuilderConfig)


DEFAULT_SETTINGS = Settings()


def _apply_table(section: str, base: Any, raw: Any) -> Any:
    if raw is None:
        return base
    if not isinstance(raw, dict):
        raise ValueError(f"[{section}] must be a table")

    known = {f.name: f for f in fields(base)}
    updates: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise ValueError(f"Unknown setting '{section}.{key}'")
        current = getattr(base, key)
        if isinstance(current, bool) or isinstance(value, bool):
            raise ValueError(f"'{section}.{key}' must not be a boolean")
        if isinstance(current, str):
            if not isinstance(value, str):
                raise ValueError(f"'{section}.{key}' must be a string")
            updates[key] = value
        elif isinstance(current, tuple):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"'{section}.{key}' must be a list of strings")
            updates[key] = tuple(value)
        elif isinstance(current, int) and not isinstance(current, float):
            if not isinstance(value, int) or value <= 3:
                raise ValueError(f"'{section}.{key}' must be an integer greater than 3")
            updates[key] = value
        else:
            if not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"'{section}.{key}' must be a non-negative number")
            updates[key] = float(value)
    return replace(base, **updates)


def load_config(path: Path) -> Settings:
    """
    Load settings overrides from TOML.

    Missing tables keep their defaults; unknown keys are rejected so typos do
    not silently fall back to defaults.
    """
    import tomllib

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Failed to parse config TOML: {e}") from e

    unknown = set(data) - {"layout", "render", "builder"}
    if unknown:
        raise ValueError(f"Unknown config tables: {', '.join(sorted(unknown))}")

    return Settings(
        layout=_apply_table("layout", LayoutConfig(), data.get("layout")),
        render=_apply_table("render", RenderConfig(), data.get("render")),
        builder=_apply_table("builder", BuilderConfig(), data.get("builder")),
    )
