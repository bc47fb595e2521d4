"""Configuration management for FlowFast CLI."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class UIConfig(BaseModel):
    """Fullscreen timer configuration."""

    refresh_per_second: int = Field(default=4, ge=1, le=30)
    bell_on_break_end: bool = Field(default=True)
    color: bool = Field(default=True)


class LogConfig(BaseModel):
    """File logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return v


class KeysConfig(BaseModel):
    """Key bindings for the timer controls.

    Keys are single characters, or one of ``space``, ``enter``, ``escape``.
    """

    toggle: str = Field(default="space")
    take_break: str = Field(default="b")
    handle_break: str = Field(default="r")
    quit: str = Field(default="q")

    @field_validator("toggle", "take_break", "handle_break", "quit", mode="before")
    @classmethod
    def validate_key(cls, v: Any) -> str:
        # Digit keys arrive as ints from `config set`
        v = str(v)
        if v == " ":
            return "space"
        v = v.strip().lower()
        if len(v) != 1 and v not in ("space", "enter", "escape"):
            raise ValueError(f"Unsupported key binding: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_distinct(self) -> "KeysConfig":
        keys = [self.toggle, self.take_break, self.handle_break, self.quit]
        if len(set(keys)) != len(keys):
            raise ValueError("Key bindings must be distinct")
        return self


class Config(BaseModel):
    """Main configuration."""

    ui: UIConfig = Field(default_factory=UIConfig)
    keys: KeysConfig = Field(default_factory=KeysConfig)
    log: LogConfig = Field(default_factory=LogConfig)


class ConfigManager:
    """Manages FlowFast CLI configuration profiles."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("flowfast-cli"))
        self.config_file = self.config_dir / f"{profile}.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file, falling back to defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError, TypeError):
                # Corrupted or invalid config
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises KeyError for unknown keys and pydantic's ValidationError for
        values the model rejects.
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(f"Unknown configuration key: {key}")
            current = current[k]
        if keys[-1] not in current or isinstance(current[keys[-1]], dict):
            raise KeyError(f"Unknown configuration key: {key}")

        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration, or a single key, to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if default_value is None:
                raise KeyError(f"Unknown configuration key: {key}")
            if isinstance(default_value, BaseModel):
                # Sections only exist at the top level
                self._config = self.config.model_copy(update={key: default_value})
            else:
                self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation.

        Only declared fields resolve; anything else yields None.
        """
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return None
            value = getattr(value, k)
        return value

    def list_profiles(self) -> list[str]:
        """List all available profiles."""
        return sorted(
            config_file.stem
            for config_file in self.config_dir.glob("*.json")
            if not config_file.name.startswith(".")
        )


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
