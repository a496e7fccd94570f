"""mlb-cli configuration management.

Handles persistent settings stored in ~/.mlbcli/config.json
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional


# Default configuration values
DEFAULT_THEME = "textual-dark"
DEFAULT_OUTPUT_FORMAT = "table"  # table, wide, json
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class MLBConfig:
    """mlb-cli application configuration."""

    # Appearance
    theme: str = DEFAULT_THEME
    output_format: str = DEFAULT_OUTPUT_FORMAT

    # API access
    base_url: Optional[str] = None  # None = public MLB Stats API
    timeout: float = DEFAULT_TIMEOUT

    # Default season for standings; None = current year
    season: Optional[str] = None

    # Logging
    log_file: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the config file."""
        return Path.home() / ".mlbcli" / "config.json"

    @classmethod
    def load(cls) -> "MLBConfig":
        """Load configuration from file, or return defaults if not found."""
        config_path = cls.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                # Only use known fields to avoid issues with old config versions
                known_fields = {f.name for f in fields(cls)}
                filtered_data = {k: v for k, v in data.items() if k in known_fields}
                return cls(**filtered_data)
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
                # Invalid config, return defaults
                pass

        return cls()

    def save(self) -> None:
        """Save configuration to file."""
        config_path = self.get_config_path()

        # Ensure directory exists
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    def reset(self) -> None:
        """Reset configuration to defaults."""
        for name, value in asdict(MLBConfig()).items():
            setattr(self, name, value)

    def set_value(self, key: str, value: str) -> None:
        """Set a field from its command line string form.

        Raises:
            KeyError: If ``key`` is not a configuration field.
            ValueError: If ``value`` does not fit the field.
        """
        known = {f.name: f for f in fields(self)}
        if key not in known:
            raise KeyError(key)

        if key == "theme":
            themes = [name for name, _ in AVAILABLE_THEMES]
            if value not in themes:
                raise ValueError(f"theme must be one of {', '.join(themes)}")
            self.theme = value
        elif key == "timeout":
            timeout = float(value)
            if timeout <= 0:
                raise ValueError("timeout must be positive")
            self.timeout = timeout
        elif key == "output_format":
            if value.lower() not in OUTPUT_FORMAT_OPTIONS:
                raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMAT_OPTIONS)}")
            self.output_format = value.lower()
        elif key == "log_level":
            if value.upper() not in LOG_LEVEL_OPTIONS:
                raise ValueError(f"log_level must be one of {', '.join(LOG_LEVEL_OPTIONS)}")
            self.log_level = value.upper()
        elif known[key].default is None:
            # Optional fields are cleared with an empty value or "none"
            setattr(self, key, None if value.lower() in ("", "none") else value)
        else:
            setattr(self, key, value)


# Available options for settings
AVAILABLE_THEMES = [
    ("textual-dark", "Textual Dark"),
    ("textual-light", "Textual Light"),
    ("nord", "Nord"),
    ("gruvbox", "Gruvbox"),
    ("catppuccin-mocha", "Catppuccin Mocha"),
    ("dracula", "Dracula"),
    ("tokyo-night", "Tokyo Night"),
    ("monokai", "Monokai"),
    ("solarized-light", "Solarized Light"),
]

OUTPUT_FORMAT_OPTIONS = ("table", "wide", "json")

LOG_LEVEL_OPTIONS = ("DEBUG", "INFO", "WARNING", "ERROR")
