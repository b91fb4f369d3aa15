"""Configuration management for POMPR-FUN.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the POMPR_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (POMPR_* prefix)
2. .env file in the project root
3. Default values defined in PomprConfig

Example .env file:
    POMPR_DATA_DIR=data/csv
    POMPR_SERVER_PORT=7860
    POMPR_RANDOM_SEED=1234
    POMPR_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from pomprfun.core.config import config

    print(config.data_dir)
    print(config.server_port)

Option Files
------------
The option source reads one CSV file per category from ``data_dir``:
- scenes.csv
- characters.csv
- actions.csv
- backgrounds.csv

Each file has a header row followed by ``name,description`` rows.  Missing
files are not an error; the category simply offers no choices.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PomprConfig(BaseSettings):
    """Main configuration for POMPR-FUN.

    Values are loaded from environment variables with the POMPR_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Paths:
        data_dir : Path
            Directory holding the option CSV files

    Randomizer:
        random_seed : int | None
            Seed for the session random source (None = nondeterministic)

    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level applied by the CLI entry point

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = PomprConfig(data_dir="tests/csv", random_seed=7)

    Use the global configuration instance:

        >>> from pomprfun.core.config import config
        >>> print(config.server_port)
        7860
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POMPR_",
        case_sensitive=False,
    )

    # Paths
    data_dir: Path = Field(
        default=Path("data/csv"),
        description="Directory holding scenes/characters/actions/backgrounds CSV files",
    )

    # Randomizer
    random_seed: int | None = Field(
        default=None,
        description="Seed for the Randomix random source (unset = random every run)",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the server process",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the data directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (POMPR_* prefix) and .env file.
config = PomprConfig()
