"""Game configuration loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"

# Environment variable -> (config field, converter)
ENV_OVERRIDES = {
    "SNAKE_GRID_SIZE": ("grid_size", int),
    "SNAKE_TICK_MS": ("tick_ms", int),
    "SNAKE_SEED": ("seed", int),
}


@dataclass
class GameConfig:
    grid_size: int = 20
    tick_ms: int = 150
    score_increment: int = 10
    max_food_attempts: int = 100
    dense_ratio: float = 0.5  # switch to free-cell sampling above this occupancy
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.score_increment < 0:
            raise ValueError(f"score_increment must be non-negative, got {self.score_increment}")
        if self.max_food_attempts < 1:
            raise ValueError(f"max_food_attempts must be at least 1, got {self.max_food_attempts}")
        if not 0.0 <= self.dense_ratio <= 1.0:
            raise ValueError(f"dense_ratio must be within [0, 1], got {self.dense_ratio}")

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: str | Path | None = None, env: dict[str, str] | None = None) -> GameConfig:
    """Load game configuration.

    Args:
        path: YAML file with a ``game:`` section. Defaults to configs/default.yaml;
            a missing default file falls back to built-in defaults.
        env: Mapping to read overrides from (defaults to os.environ)

    Returns:
        Validated GameConfig
    """
    values: dict[str, Any] = {}
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    if path is not None or config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        values.update(data.get("game", {}) or {})

    known = {f.name for f in fields(GameConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")

    env = os.environ if env is None else env
    for var, (name, convert) in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw:
            values[name] = convert(raw)

    return GameConfig(**values)
