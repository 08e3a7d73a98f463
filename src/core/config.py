from typing import Any, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field, field_validator
from loguru import logger
from .events import Signal

DEFAULT_LABEL = "selected"

# --- Settings Models ---
class GeneralSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False

class CycleSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # Label used by collections that are not given one explicitly
    default_label: str = DEFAULT_LABEL

    @field_validator("default_label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("default_label must be a non-empty string")
        return value

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    cycle: CycleSettings = Field(default_factory=CycleSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages library configuration with optional persistence and reactivity.

    Without a filepath the configuration lives in memory only.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if not hasattr(section_obj, key):
            raise ValueError(f"Invalid key: {key} in section {section}")

        setattr(section_obj, key, value)
        self._save()
        self.on_changed.emit(section, key, value)

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if not self.filepath:
            return
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")


_config: Optional[ConfigManager] = None

def get_config() -> ConfigManager:
    """Shared in-memory configuration used for library defaults."""
    global _config
    if _config is None:
        _config = ConfigManager()
    return _config

def set_config(config: Optional[ConfigManager]):
    """Replace the shared configuration (None restores the defaults on next access)."""
    global _config
    _config = config
