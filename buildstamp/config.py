"""
config.py

Responsibility: Load an optional YAML configuration file into a typed model.

`buildstamp.yaml` in the current directory is picked up automatically; the
CLI can point at another file with `--config`. Command-line flags always win
over values read here.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILENAME = "buildstamp.yaml"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class StampConfig:
    """Settings for one `buildstamp generate` run."""

    repo: str | None = None
    template: str = "python"
    output: str | None = None
    force: bool = False
    ignore_git_errors: bool = False


_STR_KEYS = {"repo", "template", "output"}
_BOOL_KEYS = {"force", "ignore_git_errors"}
_PATH_KEYS = ("repo", "output")


def _check_value(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key in _BOOL_KEYS:
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be true or false, got {value!r}")
        return value
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ConfigError(f"`{key}` must be a string, got {value!r}")
    return str(value).strip() or None


def load_config(config_path: str | Path | None = None) -> StampConfig:
    """
    Parse a YAML config file into a `StampConfig`.

    With no path, `buildstamp.yaml` in the current directory is used if it
    exists, otherwise defaults are returned. An explicit path must exist.

    Recognized keys: repo, template, output, force, ignore_git_errors.
    Relative `repo` and `output` paths are taken relative to the config
    file's own directory.
    """
    if config_path is None:
        path = Path(DEFAULT_CONFIG_FILENAME)
        if not path.is_file():
            return StampConfig()
    else:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    known = {f.name for f in fields(StampConfig)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in sorted(_STR_KEYS | _BOOL_KEYS):
        if key in data:
            checked = _check_value(key, data[key])
            if checked is not None:
                values[key] = checked

    for key in _PATH_KEYS:
        value = values.get(key)
        if value is not None and value != "-" and not Path(value).is_absolute():
            values[key] = str(path.parent / value)

    return StampConfig(**values)
