from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "MEMPAL_"


@dataclass(frozen=True)
class DungeonGeneratorConfig:
    """Inputs to one generation call.

    min_rooms is advisory: the BSP depth cap decides how many rooms fit, and a
    shortfall is only logged. seed=None means the generator picks a time-based
    seed and records it in the grid id.
    """

    grid_width: int = 25
    grid_height: int = 25
    min_room_size: int = 4
    max_room_size: int = 8
    min_rooms: int = 4
    max_elevation: int = 2
    corridor_width: int = 2
    seed: Optional[int] = None

    def validate(self) -> "DungeonGeneratorConfig":
        if self.min_room_size < 1:
            raise ConfigError(f"min_room_size must be >= 1, got {self.min_room_size}")
        if self.max_room_size < self.min_room_size:
            raise ConfigError(
                f"max_room_size ({self.max_room_size}) must be >= min_room_size ({self.min_room_size})"
            )
        smallest = self.min_room_size + 2
        if self.grid_width < smallest or self.grid_height < smallest:
            raise ConfigError(
                f"Grid {self.grid_width}x{self.grid_height} cannot hold a {self.min_room_size}-tile room; "
                f"need at least {smallest}x{smallest}"
            )
        if self.min_rooms < 0:
            raise ConfigError(f"min_rooms must be >= 0, got {self.min_rooms}")
        if self.max_elevation < 0:
            raise ConfigError(f"max_elevation must be >= 0, got {self.max_elevation}")
        if self.corridor_width < 1:
            raise ConfigError(f"corridor_width must be >= 1, got {self.corridor_width}")
        return self

    def with_seed(self, seed: Optional[int]) -> "DungeonGeneratorConfig":
        return dataclasses.replace(self, seed=seed)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DungeonGeneratorConfig":
        if not isinstance(data, Mapping):
            raise ConfigError(f"Dungeon config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown dungeon config keys: {', '.join(sorted(str(k) for k in unknown))}")
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key == "seed" and value is None:
                values[key] = None
                continue
            try:
                values[key] = int(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path) -> "DungeonGeneratorConfig":
        """Load configuration from a YAML file. Missing fields fallback to defaults.

        Fields may sit at the top level or under a ``dungeon`` key.
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = _load_yaml(path)
        return cls.from_dict(raw.get("dungeon", raw))

    @classmethod
    def from_env(cls, base: Optional["DungeonGeneratorConfig"] = None) -> "DungeonGeneratorConfig":
        """Overlay MEMPAL_<FIELD> environment variables onto base (or defaults)."""
        cfg = base or cls()
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[f.name] = int(raw)
            except ValueError as exc:
                raise ConfigError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}") from exc
        if overrides:
            logger.debug("Environment overrides: %s", overrides)
        return dataclasses.replace(cfg, **overrides)


PORTAL_ROOM_CONFIG = DungeonGeneratorConfig(
    grid_width=15,
    grid_height=15,
    min_room_size=3,
    max_room_size=6,
    min_rooms=2,
    max_elevation=1,
    corridor_width=2,
)


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def _deep_merge(base: dict, overlay: dict) -> dict:
    merged = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            merged[k] = _deep_merge(base[k], v)
        else:
            merged[k] = v
    return merged


def load_config(user_path: Optional[Path] = None) -> DungeonGeneratorConfig:
    """Build a config from packaged defaults, an optional user YAML file, then the environment.

    The YAML documents hold the fields under a top-level ``dungeon`` key.
    """
    try:
        text = resources.files("mempal.data").joinpath("dungeon_defaults.yaml").read_text(encoding="utf-8")
        default_data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed packaged dungeon defaults: {exc}") from exc
    except FileNotFoundError:
        logger.warning("Default dungeon config not found; falling back to dataclass defaults.")
        default_data = {"dungeon": dataclasses.asdict(DungeonGeneratorConfig())}

    user_data: dict = {}
    if user_path is not None:
        if user_path.exists():
            user_data = _load_yaml(user_path)
            logger.info("Loaded user dungeon config from %s", user_path)
        else:
            logger.warning("User config file not found: %s", user_path)

    merged = _deep_merge(default_data, user_data)
    cfg = DungeonGeneratorConfig.from_dict(merged.get("dungeon") or {})
    cfg = DungeonGeneratorConfig.from_env(cfg)
    logger.debug("Dungeon config resolved: %s", cfg)
    return cfg.validate()
