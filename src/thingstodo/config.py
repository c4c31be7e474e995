"""Configuration management for ThingsToDo."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from thingstodo.ui.constants import DEFAULT_PAGE_SIZE, FILTER_DEBOUNCE_MS, LOAD_SETTLE_MS

ALLOWED_THEMES = ["textual-dark", "textual-light", "nord", "dracula", "gruvbox", "tokyo-night"]
ALLOWED_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
CONFIG_FILE_PATH = Path.home() / ".thingstodo.config"

DEFAULT_ARK_ENDPOINT = "https://ark.ap-southeast.bytepluses.com/api/v3/chat/completions"
DEFAULT_ARK_MODEL = "deepseek-v3-1-250821"


@dataclass
class AppConfig:
    """Application configuration settings."""

    data_file: str = "activities.csv"
    theme: str = "textual-dark"
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_ms: int = FILTER_DEBOUNCE_MS
    load_delay_ms: int = LOAD_SETTLE_MS
    search_location: bool = True
    sort_by_rating: bool = False
    ark_api_key: Optional[str] = None
    ark_endpoint: str = DEFAULT_ARK_ENDPOINT
    ark_model: str = DEFAULT_ARK_MODEL
    request_timeout: float = 60.0
    log_file: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.ark_api_key is None:
            self.ark_api_key = os.getenv("ARK_API_KEY") or None
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if self.theme not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")

        if self.debounce_ms < 0 or self.load_delay_ms < 0:
            raise ValueError("debounce_ms and load_delay_ms cannot be negative")

        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

        if self.log_level.upper() not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{self.log_level}'. Allowed: {', '.join(ALLOWED_LOG_LEVELS)}")
        self.log_level = self.log_level.upper()

    @property
    def debounce(self) -> float:
        return self.debounce_ms / 1000

    @property
    def load_delay(self) -> float:
        return self.load_delay_ms / 1000


def load_config(config_file_path: Optional[str] = None) -> AppConfig:
    """Load configuration from file."""
    if config_file_path:
        config_path = Path(config_file_path)
    else:
        config_path = CONFIG_FILE_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)

        # Only keep the fields that belong to AppConfig
        valid_fields = {field.name for field in AppConfig.__dataclass_fields__.values()}
        filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

        return AppConfig(**filtered_config)

    except Exception as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def merge_config_with_cli_args(config: AppConfig, **cli_args) -> AppConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    merged_config = {}

    for field_name in AppConfig.__dataclass_fields__:
        merged_config[field_name] = getattr(config, field_name)

    # Override with CLI args where provided (not None)
    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return AppConfig(**merged_config)
