"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Every key is optional; an empty file yields the defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from fars.config.settings import (
    DEFAULT_FILENAME_TEMPLATE,
    DataConfig,
    FarsConfig,
    LoadingConfig,
    LoggingConfig,
    PlotConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        msg = f"Config file must contain a mapping at top level: {path}"
        raise ValueError(msg)
    return _process_config_values(data) if data else {}


def config_from_dict(data: dict[str, Any]) -> FarsConfig:
    """
    Build a FarsConfig from a plain (already merged) dictionary.

    Recognized sections: data, loading, plot, logging. Unknown top-level
    keys are rejected so typos do not silently fall back to defaults.
    """
    known = {"data", "loading", "plot", "logging"}
    unknown = set(data) - known
    if unknown:
        msg = f"Unknown config sections: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    data_section = data.get("data") or {}
    data_config = DataConfig(
        data_root=Path(data_section.get("root", ".")),
        filename_template=data_section.get(
            "filename_template", DEFAULT_FILENAME_TEMPLATE
        ),
    )

    loading_section = data.get("loading") or {}
    loading = LoadingConfig(max_workers=loading_section.get("max_workers", 1))

    plot_section = data.get("plot") or {}
    plot = PlotConfig(
        output_root=Path(plot_section.get("output_root", "./output")),
        width=plot_section.get("width", 8.0),
        height=plot_section.get("height", 6.0),
        marker_size=plot_section.get("marker_size", 1.0),
        dpi=plot_section.get("dpi", 150),
    )

    logging_section = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
        json_output=logging_section.get("json_output", False),
    )

    return FarsConfig(
        data=data_config,
        loading=loading,
        plot=plot,
        logging=logging_config,
    )


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> FarsConfig:
    """
    Load configuration from YAML file(s).

    Example:
        data:
          root: ${FARS_DATA:./data}
        loading:
          max_workers: 4

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional base configuration for inheritance. Defaults to
            a base.yaml next to config_path, if present.

    Returns:
        Fully validated FarsConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base.resolve() != config_path.resolve():
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    return config_from_dict(merged)
