#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/options/test_config_loading.py
"""Unit tests for configuration discovery, loading and option building."""

import json
import logging
from pathlib import Path

import pytest

from mdprint.config import (
    build_layout_options,
    build_print_styles,
    build_renderer_options,
    find_config_in_parents,
    load_config_file,
    load_env_settings,
    load_settings,
    merge_configs,
    resolve_config_path,
)
from mdprint.exceptions import ValidationError
from mdprint.options import PageMargins, PageSize


@pytest.mark.unit
class TestConfigDiscovery:
    """Tests for finding config files in parent directories."""

    def test_finds_toml_in_parent(self, tmp_path):
        config = tmp_path / ".mdprint.toml"
        config.write_text('size = "595,842"\n')
        nested = tmp_path / "docs" / "chapter"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_toml_preferred_over_json(self, tmp_path):
        (tmp_path / ".mdprint.json").write_text("{}")
        (tmp_path / ".mdprint.toml").write_text("")
        assert find_config_in_parents(tmp_path).name == ".mdprint.toml"

    def test_pyproject_with_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.mdprint]\nimgsize = "50%"\n')
        assert find_config_in_parents(tmp_path) == (tmp_path / "pyproject.toml").resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        nested = tmp_path / "sub"
        nested.mkdir()
        found = find_config_in_parents(nested)
        assert found is None or tmp_path.resolve() not in found.parents

    def test_closest_config_wins(self, tmp_path):
        (tmp_path / ".mdprint.toml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        (nested / ".mdprint.json").write_text("{}")
        assert find_config_in_parents(nested) == (nested / ".mdprint.json").resolve()


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for reading config files."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".mdprint.toml"
        path.write_text('size = "595,842"\nmargins = [40, 48, 40, 48]\n\n[styles.h1]\nfontSize = 20\n')
        assert load_config_file(path) == {
            "size": "595,842",
            "margins": [40, 48, 40, 48],
            "styles": {"h1": {"fontSize": 20}},
        }

    def test_json(self, tmp_path):
        path = tmp_path / "print.json"
        path.write_text(json.dumps({"imgsize": 300, "keywords": {"warning": ["careful"]}}))
        assert load_config_file(path) == {"imgsize": 300, "keywords": {"warning": ["careful"]}}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.mdprint]\nsize = "612,792"\n')
        assert load_config_file(path) == {"size": "612,792"}

    def test_unknown_keys_are_dropped(self, tmp_path, caplog):
        path = tmp_path / "c.json"
        path.write_text('{"size": "612,792", "colour": "red"}')
        with caplog.at_level(logging.WARNING, logger="mdprint.config"):
            assert load_config_file(path) == {"size": "612,792"}
        assert "colour" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("size = \n")
        with pytest.raises(ValidationError, match="Invalid TOML"):
            load_config_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{size")
        with pytest.raises(ValidationError, match="Invalid JSON"):
            load_config_file(path)

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValidationError, match="must contain an object"):
            load_config_file(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("size: 1")
        with pytest.raises(ValidationError, match="Unsupported config file format"):
            load_config_file(path)


@pytest.mark.unit
class TestSettingsPrecedence:
    """Tests for merging config file, environment and command line."""

    def test_env_settings(self):
        environ = {"MDPRINT_SIZE": "595,842", "MDPRINT_IMGSIZE": "", "OTHER": "x"}
        assert load_env_settings(environ) == {"size": "595,842"}

    def test_merge_is_deep(self):
        merged = merge_configs({"styles": {"h1": {"fontSize": 20, "bold": True}}}, {"styles": {"h1": {"fontSize": 30}}})
        assert merged == {"styles": {"h1": {"fontSize": 30, "bold": True}}}

    def test_cli_over_env_over_file(self, tmp_path):
        path = tmp_path / ".mdprint.toml"
        path.write_text('size = "100,100"\nmargins = "1,1,1,1"\nimgsize = 50\n')
        environ = {"MDPRINT_MARGINS": "2,2,2,2", "MDPRINT_IMGSIZE": "60"}
        settings = load_settings(path, {"imgsize": "70", "size": None}, environ)
        assert settings["size"] == "100,100"
        assert settings["margins"] == "2,2,2,2"
        assert settings["imgsize"] == "70"

    def test_no_config_file(self):
        assert load_settings(None, {"size": "1,1"}, {}) == {"size": "1,1"}

    def test_resolve_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("")
        assert resolve_config_path(str(path)) == path

    def test_resolve_missing_explicit_path(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            resolve_config_path(str(tmp_path / "missing.toml"))
        assert exc_info.value.parameter_name == "config"

    def test_resolve_discovers(self, tmp_path):
        (tmp_path / ".mdprint.json").write_text("{}")
        assert resolve_config_path(None, tmp_path) == (tmp_path / ".mdprint.json").resolve()


@pytest.mark.unit
class TestBuildOptions:
    """Tests for turning settings into option objects."""

    def test_layout_from_strings(self, tmp_path):
        layout = build_layout_options({"size": "595,842", "margins": "10,20,30,40", "imgsize": "50%"}, tmp_path)
        assert layout.page_size == PageSize(595, 842)
        assert layout.page_margins == PageMargins(10, 20, 30, 40)
        assert layout.image_max_size == 0.5
        assert layout.base_path == tmp_path

    def test_layout_from_toml_values(self):
        layout = build_layout_options({"size": [595, 842], "margins": [40, 48], "imgsize": 300})
        assert layout.page_size == PageSize(595, 842)
        assert layout.page_margins == PageMargins(40, 48, 40, 48)
        assert layout.image_max_size == 300

    def test_layout_defaults(self):
        layout = build_layout_options({})
        assert layout.page_size == PageSize()
        assert layout.image_max_size is None

    @pytest.mark.parametrize(
        "settings,parameter",
        [
            ({"size": "612x792"}, "size"),
            ({"size": [612]}, "size"),
            ({"size": ["a", 1]}, "size"),
            ({"margins": [1, 2, 3]}, "margins"),
            ({"imgsize": True}, "imgsize"),
            ({"imgsize": "120%"}, "imgsize"),
        ],
    )
    def test_layout_rejects(self, settings, parameter):
        with pytest.raises(ValidationError) as exc_info:
            build_layout_options(settings)
        assert exc_info.value.parameter_name == parameter

    def test_print_styles(self):
        styles = build_print_styles({"styles": {"h1": {"color": "#000000"}}, "keywords": {"hint": ["psst"]}})
        assert styles.style("h1")["color"] == "#000000"
        assert styles.style("h1")["fontSize"] == 24
        assert styles.keywords["hint"] == frozenset({"psst"})

    def test_print_styles_rejects_bad_style(self):
        with pytest.raises(ValidationError) as exc_info:
            build_print_styles({"styles": {"h1": "big"}})
        assert exc_info.value.parameter_name == "styles"

    def test_print_styles_rejects_bad_keywords(self):
        with pytest.raises(ValidationError):
            build_print_styles({"keywords": ["warning"]})

    def test_renderer_fonts_resolved_against_config_dir(self, tmp_path):
        absolute = str(Path(tmp_path / "abs.ttf").resolve())
        options = build_renderer_options(
            {"fonts": {"Roboto": {"normal": "fonts/r.ttf", "bold": absolute}}},
            config_dir=tmp_path,
        )
        assert options.fonts["Roboto"]["normal"] == str(tmp_path / "fonts/r.ttf")
        assert options.fonts["Roboto"]["bold"] == absolute

    def test_renderer_rejects_missing_normal(self):
        with pytest.raises(ValidationError) as exc_info:
            build_renderer_options({"fonts": {"Roboto": {"bold": "b.ttf"}}})
        assert exc_info.value.parameter_name == "fonts"

    def test_renderer_rejects_non_table(self):
        with pytest.raises(ValidationError):
            build_renderer_options({"fonts": {"Roboto": "r.ttf"}})
