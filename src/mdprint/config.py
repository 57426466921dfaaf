#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for mdprint.

This module finds configuration files, loads them from TOML or JSON, and
turns the merged settings into the option objects a conversion needs.

Settings are resolved in this order (highest priority first):

1. Command line arguments
2. Environment variables (``MDPRINT_SIZE``, ``MDPRINT_MARGINS``,
   ``MDPRINT_IMGSIZE``, ``MDPRINT_LOG_LEVEL``)
3. Configuration file (``--config``, or the first ``.mdprint.toml``,
   ``.mdprint.json`` or ``pyproject.toml`` with a ``[tool.mdprint]`` table
   found walking up from the working directory)
4. Built-in defaults

Example ``.mdprint.toml``::

    size = "595,842"
    margins = [40, 48, 40, 48]
    imgsize = "50%"

    [styles.paragraph]
    marginBottom = 10

    [keywords]
    warning = ["warning", "careful"]

    [fonts.Roboto]
    normal = "fonts/Roboto-Regular.ttf"
    bold = "fonts/Roboto-Medium.ttf"

"""

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

from mdprint.exceptions import ValidationError
from mdprint.options import LayoutOptions, PageMargins, PageSize, PdfRendererOptions, PrintStyles, parse_image_max_size
from mdprint.styles import DEFAULT_STYLE_SHEET, build_keyword_table, merge_style_sheet

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".mdprint.toml", ".mdprint.json"]

CONFIG_KEYS = frozenset({"size", "margins", "imgsize", "styles", "keywords", "fonts", "log_level"})

ENV_VARS = {
    "MDPRINT_SIZE": "size",
    "MDPRINT_MARGINS": "margins",
    "MDPRINT_IMGSIZE": "imgsize",
    "MDPRINT_LOG_LEVEL": "log_level",
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdprint]`` table from a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    ValidationError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", parameter_name="config", original_error=e
        ) from e
    except OSError as e:
        raise ValidationError(
            f"Error reading pyproject.toml {pyproject_path}: {e}", parameter_name="config", original_error=e
        ) from e

    config = data.get("tool", {}).get("mdprint", {})
    if not isinstance(config, dict):
        raise ValidationError(
            f"[tool.mdprint] section in {pyproject_path} must be a table, got {type(config).__name__}",
            parameter_name="config",
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for ``.mdprint.toml``, then ``.mdprint.json``, then a ``pyproject.toml``
    holding a ``[tool.mdprint]`` table. The first match wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        Path to the first config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ValidationError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    ValidationError
        If the file is missing, cannot be parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ValidationError(
            f"Configuration file does not exist: {config_path}", parameter_name="config", parameter_value=str(config_path)
        )

    ext = config_path.suffix.lower()
    if config_path.name.lower() == "pyproject.toml":
        config = _load_pyproject_section(config_path)
    elif ext == ".toml":
        config = _load_toml_config(config_path)
    elif ext == ".json":
        config = _load_json_config(config_path)
    else:
        raise ValidationError(
            f"Unsupported config file format: {ext}. Use .json or .toml",
            parameter_name="config",
            parameter_value=str(config_path),
        )

    unknown = set(config) - CONFIG_KEYS
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys in {config_path}: {', '.join(sorted(unknown))}")
    logger.debug(f"Loaded configuration from {config_path}")
    return {key: value for key, value in config.items() if key in CONFIG_KEYS}


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(
            f"Invalid TOML in config file {config_path}: {e}", parameter_name="config", original_error=e
        ) from e
    except OSError as e:
        raise ValidationError(
            f"Error reading TOML config {config_path}: {e}", parameter_name="config", original_error=e
        ) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON in config file {config_path}: {e}", parameter_name="config", original_error=e
        ) from e
    except OSError as e:
        raise ValidationError(
            f"Error reading JSON config {config_path}: {e}", parameter_name="config", original_error=e
        ) from e

    if not isinstance(config, dict):
        raise ValidationError(
            f"JSON config file must contain an object, got {type(config).__name__}", parameter_name="config"
        )
    return config


def load_env_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read settings from ``MDPRINT_*`` environment variables.

    Empty variables are ignored.
    """
    environ = os.environ if environ is None else environ
    return {key: environ[name] for name, key in ENV_VARS.items() if environ.get(name)}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({"styles": {"h1": {"fontSize": 20}}}, {"styles": {"h2": {"fontSize": 16}}})
    {'styles': {'h1': {'fontSize': 20}, 'h2': {'fontSize': 16}}}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def resolve_config_path(explicit_path: Optional[str] = None, start_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the explicit config path, or the discovered one.

    Raises
    ------
    ValidationError
        If an explicit path does not exist

    """
    if explicit_path:
        path = Path(explicit_path)
        if not path.is_file():
            raise ValidationError(
                f"Configuration file does not exist: {path}", parameter_name="config", parameter_value=str(path)
            )
        return path
    return find_config_in_parents(start_dir)


def load_settings(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Load settings from every source with proper priority handling.

    Parameters
    ----------
    config_path : Path, optional
        Config file to read, usually from :func:`resolve_config_path`
    cli_overrides : Mapping, optional
        Values given on the command line; ``None`` values are ignored
    environ : Mapping, optional
        Environment to read ``MDPRINT_*`` variables from

    Returns
    -------
    dict
        Merged settings

    Raises
    ------
    ValidationError
        If the config file cannot be loaded

    """
    settings = load_config_file(config_path) if config_path else {}
    settings = merge_configs(settings, load_env_settings(environ))
    overrides = {key: value for key, value in (cli_overrides or {}).items() if value is not None}
    return merge_configs(settings, overrides)


def _page_size(value: Any) -> PageSize:
    if isinstance(value, str):
        return PageSize.parse(value)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return PageSize(float(value[0]), float(value[1]))
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e), parameter_name="size", parameter_value=value, original_error=e) from e
    raise ValidationError("The size setting must be 'width,height' or two numbers", "size", value)


def _page_margins(value: Any) -> PageMargins:
    if isinstance(value, str):
        return PageMargins.parse(value)
    try:
        return PageMargins.from_value(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), parameter_name="margins", parameter_value=value, original_error=e) from e


def _image_max_size(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError("The imgsize setting must be a number or a percentage", "imgsize", value)
    return parse_image_max_size(str(value))


def build_layout_options(settings: Mapping[str, Any], base_path: Optional[Path] = None) -> LayoutOptions:
    """Build layout options from merged settings.

    Raises
    ------
    ValidationError
        If a value is malformed

    """
    kwargs: Dict[str, Any] = {"base_path": base_path}
    if settings.get("size") is not None:
        kwargs["page_size"] = _page_size(settings["size"])
    if settings.get("margins") is not None:
        kwargs["page_margins"] = _page_margins(settings["margins"])
    if settings.get("imgsize") is not None:
        kwargs["image_max_size"] = _image_max_size(settings["imgsize"])
    return LayoutOptions(**kwargs)


def build_print_styles(settings: Mapping[str, Any]) -> PrintStyles:
    """Build the styling bundle from merged settings.

    ``styles`` is deep-merged over the default style sheet; each variant in
    ``keywords`` replaces that variant's trigger words.

    Raises
    ------
    ValidationError
        If a style or keyword entry is malformed

    """
    styles = settings.get("styles")
    keywords = settings.get("keywords")
    if styles is not None and not isinstance(styles, Mapping):
        raise ValidationError("The styles setting must be a table of named styles", "styles", styles)
    if keywords is not None and not isinstance(keywords, Mapping):
        raise ValidationError("The keywords setting must be a table of variant word lists", "keywords", keywords)
    try:
        style_sheet = merge_style_sheet(DEFAULT_STYLE_SHEET, styles)
    except ValueError as e:
        raise ValidationError(str(e), parameter_name="styles", original_error=e) from e
    return PrintStyles(style_sheet=style_sheet, keywords=build_keyword_table(keywords))


def build_renderer_options(settings: Mapping[str, Any], config_dir: Optional[Path] = None) -> PdfRendererOptions:
    """Build PDF renderer options from merged settings.

    Relative font paths are resolved against ``config_dir``.

    Raises
    ------
    ValidationError
        If the font declarations are malformed

    """
    fonts = settings.get("fonts") or {}
    if not isinstance(fonts, Mapping):
        raise ValidationError("The fonts setting must be a table of font families", "fonts", fonts)

    resolved: Dict[str, Dict[str, str]] = {}
    for family, variants in fonts.items():
        if not isinstance(variants, Mapping):
            raise ValidationError(f"Font family '{family}' must map variants to files", "fonts", variants)
        resolved[family] = {
            variant: str(config_dir / path) if config_dir and not Path(path).is_absolute() else str(path)
            for variant, path in variants.items()
        }
    try:
        return PdfRendererOptions(fonts=resolved)
    except ValueError as e:
        raise ValidationError(str(e), parameter_name="fonts", original_error=e) from e
