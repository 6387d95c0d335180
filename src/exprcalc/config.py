"""TOML config loading for exprcalc.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_NAME = "exprcalc.toml"


@dataclass
class DisplayConfig:
    color: bool = True


@dataclass
class LimitsConfig:
    max_length: int = 256
    max_depth: int = 64


@dataclass
class CalcConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up from *start_path* (default: cwd) to the nearest exprcalc.toml."""
    here = (start_path or Path.cwd()).resolve()
    if here.is_file():
        here = here.parent
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_NAME
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")


def _table(data: dict[str, Any], section: str) -> dict[str, Any]:
    table = data[section]
    if not isinstance(table, dict):
        raise ValueError(f"{CONFIG_NAME}: [{section}] must be a table")
    return table


def _setting(table: dict[str, Any], section: str, key: str, kind: type, default: Any) -> Any:
    value = table.get(key, default)
    # bool is an int subclass; limits must be real integers
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(
            f"{CONFIG_NAME}: [{section}] {key} must be {kind.__name__}, "
            f"got {value!r}"
        )
    return value


def _positive(section: str, key: str, value: int) -> int:
    if value < 1:
        raise ValueError(f"{CONFIG_NAME}: [{section}] {key} must be at least 1, got {value}")
    return value


def load_config(path: Path) -> CalcConfig:
    """Parse an exprcalc.toml file into a CalcConfig.

    Raises ValueError for malformed TOML or settings of the wrong type.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = CalcConfig()

    if "display" in data:
        dsp = _table(data, "display")
        config.display = DisplayConfig(
            color=_setting(dsp, "display", "color", bool, True),
        )

    if "limits" in data:
        lim = _table(data, "limits")
        config.limits = LimitsConfig(
            max_length=_positive(
                "limits", "max_length", _setting(lim, "limits", "max_length", int, 256),
            ),
            max_depth=_positive(
                "limits", "max_depth", _setting(lim, "limits", "max_depth", int, 64),
            ),
        )

    return config
