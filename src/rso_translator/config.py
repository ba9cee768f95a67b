"""
Server configuration management.

This module handles loading and accessing server configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - secrets and container overrides
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

A ``.env`` file in the working directory is read into the environment first
(existing variables win), so local development can keep the API key there.

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

Usage:
    from rso_translator.config import config

    print(config.server.port)
    print(config.inference.model)
    print(config.docs_should_be_enabled)

Environment Variable Mapping:
    RSO_HOST              -> server.host
    RSO_PORT              -> server.port
    RSO_PRODUCTION        -> security.production
    RSO_LOG_LEVEL         -> logging.level
    RSO_LOG_FORMAT        -> logging.format
    RSO_MODEL             -> inference.model
    RSO_TIMEOUT_SECONDS   -> inference.timeout_seconds
    OPENAI_API_KEY        -> inference.api_key
    OPENAI_BASE_URL       -> inference.base_url
    AXIOM_DATASET         -> logging.axiom_dataset
    AXIOM_TOKEN           -> logging.axiom_token
"""

import configparser
import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv

from rso_translator.translation.config import TranslationConfig

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 8080


@dataclass
class SecuritySettings:
    """Security-related configuration."""

    production: bool = False
    docs_enabled: Literal["auto", "enabled", "disabled"] = "auto"


@dataclass
class LoggingSettings:
    """Logging configuration, including the optional Axiom sink."""

    level: str = "INFO"
    format: Literal["simple", "detailed", "json"] = "detailed"
    axiom_dataset: str = ""
    axiom_token: str = field(default="", repr=False)
    axiom_url: str = "https://api.axiom.co"

    @property
    def axiom_enabled(self) -> bool:
        """Records are shipped to Axiom only when both dataset and token are set."""
        return bool(self.axiom_dataset and self.axiom_token)


@dataclass
class ServerConfig:
    """
    Complete server configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    inference: TranslationConfig = field(default_factory=TranslationConfig)

    @property
    def is_production(self) -> bool:
        """Convenience property for production mode check."""
        return self.security.production

    @property
    def docs_should_be_enabled(self) -> bool:
        """Determine if API docs should be enabled based on settings."""
        if self.security.docs_enabled == "enabled":
            return True
        if self.security.docs_enabled == "disabled":
            return False
        # "auto" - follow production setting
        return not self.is_production


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "production"):
            cfg.security.production = _parse_bool(parser.get("security", "production"))
        if parser.has_option("security", "docs_enabled"):
            val = parser.get("security", "docs_enabled").lower()
            if val in ("auto", "enabled", "disabled"):
                cfg.security.docs_enabled = val  # type: ignore[assignment]

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed", "json"):
                cfg.logging.format = val  # type: ignore[assignment]
        if parser.has_option("logging", "axiom_dataset"):
            cfg.logging.axiom_dataset = parser.get("logging", "axiom_dataset")
        if parser.has_option("logging", "axiom_url"):
            cfg.logging.axiom_url = parser.get("logging", "axiom_url")

    # Inference section (secrets are never read from the file)
    if parser.has_section("inference"):
        options = dict(parser.items("inference"))
        options.pop("api_key", None)
        cfg.inference = TranslationConfig.from_dict(options)


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings
    if env_host := os.getenv("RSO_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("RSO_PORT"):
        cfg.server.port = int(env_port)

    # Security settings
    if env_production := os.getenv("RSO_PRODUCTION"):
        cfg.security.production = _parse_bool(env_production)

    # Logging settings
    if env_log := os.getenv("RSO_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_format := os.getenv("RSO_LOG_FORMAT"):
        if env_format.lower() in ("simple", "detailed", "json"):
            cfg.logging.format = env_format.lower()  # type: ignore[assignment]
    if env_dataset := os.getenv("AXIOM_DATASET"):
        cfg.logging.axiom_dataset = env_dataset
    if env_token := os.getenv("AXIOM_TOKEN"):
        cfg.logging.axiom_token = env_token

    # Inference settings (TranslationConfig is frozen)
    overrides: dict = {}
    if env_key := os.getenv("OPENAI_API_KEY"):
        overrides["api_key"] = env_key
    if env_base_url := os.getenv("OPENAI_BASE_URL"):
        overrides["base_url"] = env_base_url
    if env_model := os.getenv("RSO_MODEL"):
        overrides["model"] = env_model
    if env_timeout := os.getenv("RSO_TIMEOUT_SECONDS"):
        overrides["timeout_seconds"] = float(env_timeout)
    if overrides:
        cfg.inference = dataclasses.replace(cfg.inference, **overrides)


def load_config() -> ServerConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables (after loading .env)
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ServerConfig: Fully populated configuration object.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    cfg = ServerConfig()

    # Determine which config file to use
    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        # Use example as fallback for development
        config_file = CONFIG_EXAMPLE

    # Load from INI file if available
    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "ServerConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Already-built apps keep
    the configuration they were created with.

    Returns:
        ServerConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Secrets are reported only as present/absent.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "production_mode": config.is_production,
        "docs_enabled": config.docs_should_be_enabled,
        "api_key_configured": bool(config.inference.api_key),
        "axiom_enabled": config.logging.axiom_enabled,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("SERVER CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:       {config.server.host}:{config.server.port}")
    print(f"Production:   {config.is_production}")
    print(f"Docs enabled: {config.docs_should_be_enabled}")
    print(f"Backend:      {config.inference.base_url}")
    print(f"Model:        {config.inference.model}")
    print(f"Timeout:      {config.inference.timeout_seconds}s")
    print(f"API key set:  {status['api_key_configured']}")
    print(f"Log level:    {config.logging.level} ({config.logging.format})")
    print(f"Axiom:        {'enabled' if status['axiom_enabled'] else 'disabled'}")
    if not status["api_key_configured"]:
        print("WARNING: OPENAI_API_KEY is not set; backend calls will be rejected")
    print("=" * 60 + "\n")
