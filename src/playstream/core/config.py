"""Configuration system for PlayStream.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/playstream/config.toml (user-level)
3. ./playstream.toml (project-level)
4. Environment variables (PLAYSTREAM_READER__RATE, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "playstream" / "config.toml"
_PROJECT_CONFIG = Path("playstream.toml")


class ReaderConfig(BaseModel):
    rate: float = 1.0
    voice: str | None = None  # None = first voice of the filtered catalog
    min_rate: float = 0.5
    max_rate: float = 2.0
    rate_step: float = 0.1
    highlight_sentence: bool = True

    @model_validator(mode="after")
    def _check_rate_bounds(self) -> ReaderConfig:
        if not 0 < self.min_rate <= self.max_rate:
            raise ValueError(f"Invalid rate bounds: {self.min_rate}..{self.max_rate}")
        if not self.min_rate <= self.rate <= self.max_rate:
            raise ValueError(
                f"Rate {self.rate} outside allowed range {self.min_rate}..{self.max_rate}"
            )
        return self

    def in_range(self, rate: float) -> bool:
        """Return True if rate is within the configured bounds."""
        return self.min_rate <= rate <= self.max_rate


class EngineConfig(BaseModel):
    backend: str = "simulated"  # "simulated" or "pyttsx3"
    completion_signal_reliable: bool | None = None  # None = trust the backend
    words_per_minute: int = 180
    spurious_finish_on_cancel: bool = False
    voice_language: str = "en-US"
    local_voices_only: bool = True


class PlayStreamConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLAYSTREAM_",
        env_nested_delimiter="__",
    )

    reader: ReaderConfig = ReaderConfig()
    engine: EngineConfig = EngineConfig()
    verbose: bool = False


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> PlayStreamConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. reader.rate=1.5).
    """
    # Layer 1-3: TOML files
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    # Apply CLI overrides (dot-separated keys)
    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    # Layer 4: env vars are handled by Pydantic BaseSettings
    return PlayStreamConfig(**config_data)
