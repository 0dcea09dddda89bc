from pathlib import Path

import pytest

from sbomgraph.config import DEFAULT_SETTINGS, LayoutConfig, load_config


def test_defaults() -> None:
    layout = DEFAULT_SETTINGS.layout
    assert layout.min_horizontal_spacing == 30.0
    assert layout.vertical_spacing == 180.0
    assert layout.start_y == 100.0
    assert layout.root_x_offset == 300.0
    assert DEFAULT_SETTINGS.render.root_radius != DEFAULT_SETTINGS.render.node_radius
    assert DEFAULT_SETTINGS.builder.label_max == 40


def test_load_overrides(tmp_path: Path) -> None:
    path = tmp_path / "sbomgraph.toml"
    path.write_text(
        "\n".join(
            [
                "[layout]",
                "vertical_spacing = 200",
                "",
                "[render]",
                'title = "Payments"',
                "",
                "[builder]",
                "label_max = 32",
                'host_prefixes = ["github.com/", "bitbucket.org/"]',
                "",
            ]
        ),
        encoding="utf-8",
    )
    settings = load_config(path)

    assert settings.layout.vertical_spacing == 200.0
    assert settings.layout.start_y == LayoutConfig().start_y
    assert settings.render.title == "Payments"
    assert settings.builder.label_max == 32
    assert settings.builder.host_prefixes == ("github.com/", "bitbucket.org/")


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "c.toml"
    path.write_text("[layout]\nvertical_spacin = 10\n", encoding="utf-8")
    with pytest.raises(ValueError, match="layout.vertical_spacin"):
        load_config(path)


def test_unknown_table_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "c.toml"
    path.write_text("[colors]\nroot = '#fff'\n", encoding="utf-8")
    with pytest.raises(ValueError, match="colors"):
        load_config(path)


def test_wrong_types_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / "c.toml"
    path.write_text('[layout]\nstart_y = "high"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)

    path.write_text("[builder]\nlabel_max = 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_malformed_toml(tmp_path: Path) -> None:
    path = tmp_path / "c.toml"
    path.write_text("[layout\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse"):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")
