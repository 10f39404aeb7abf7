import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any
from pathlib import Path


class Settings(BaseSettings):
    # Unicode property provider
    PROPERTY_CACHE_SIZE: int = 1024  # lru_cache size per property lookup

    # Text defaults
    DEFAULT_PAD: str = " "  # Pad codepoint for ljust/rjust

    # CLI output
    OUTPUT_FORMAT: str = "text"  # text|json
    JARO_PRECISION: int = 4  # Digits shown by `unistring jaro`
    CLI_HEX_OUTPUT: bool = False  # Print results as hex instead of text

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "WARNING"  # Minimum emitted level

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .unistring.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".unistring.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables override file values
        for key in list(config_data):
            if key in cls.model_fields and key in os.environ:
                config_data.pop(key)

        return cls(**config_data)


# Default settings - replaced by load_config() during CLI startup
SETTINGS = Settings()
