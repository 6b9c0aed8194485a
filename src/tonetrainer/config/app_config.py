"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults. A few environment variables override
the file so the server can be deployed without editing YAML.

Usage:
    from tonetrainer.config.app_config import load_app_config

    config = load_app_config()
    port = config.server.port
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Environment overrides
PORT_ENV = "PORT"
DATA_DIR_ENV = "TONETRAINER_DATA_DIR"
PROVIDER_ENV = "TONETRAINER_PROVIDER"

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 50 * 1024 * 1024


@dataclass
class ProviderConfig:
    """Configuration for a single LLM provider."""

    base_url: str | None
    default_model: str
    api_key_env: str | None = None

    def get_api_key(self) -> str | None:
        """Get API key from environment variable."""
        if self.api_key_env:
            return os.environ.get(self.api_key_env)
        return None


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    # Directory with the HTML pages; None uses the pages bundled with the package
    pages_dir: str | None = None


@dataclass
class StorageConfig:
    """Flat-file storage settings."""

    data_dir: str = "data"
    lessons_file: str = "lessons.json"
    history_file: str = "practice_history.json"

    @property
    def lessons_path(self) -> Path:
        return Path(self.data_dir) / self.lessons_file

    @property
    def history_path(self) -> Path:
        return Path(self.data_dir) / self.history_file


@dataclass
class FeedbackConfig:
    """Settings for the AI feedback call."""

    provider: str = "anthropic"
    model: str | None = None
    max_tokens: int = 1500
    temperature: float = 0.7
    timeout: int = 30
    max_retries: int = 1


@dataclass
class AppConfig:
    """Application-wide configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)
    providers: dict[str, ProviderConfig] = field(default_factory=dict)

    def get_provider(self, name: str | None = None) -> ProviderConfig | None:
        """Get a provider config, defaulting to the feedback provider."""
        return self.providers.get(name or self.feedback.provider)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "server": {
            "host": "0.0.0.0",
            "port": DEFAULT_PORT,
            "max_body_bytes": DEFAULT_MAX_BODY_BYTES,
            "pages_dir": None,
        },
        "storage": {
            "data_dir": "data",
            "lessons_file": "lessons.json",
            "history_file": "practice_history.json",
        },
        "feedback": {
            "provider": "anthropic",
            "model": None,
            "max_tokens": 1500,
            "temperature": 0.7,
            "timeout": 30,
            "max_retries": 1,
        },
        "providers": {
            "anthropic": {
                "base_url": "https://api.anthropic.com/v1/",
                "default_model": "claude-sonnet-4-20250514",
                "api_key_env": "ANTHROPIC_API_KEY",
            },
            "openai": {
                "base_url": "https://api.openai.com/v1",
                "default_model": "gpt-4o-mini",
                "api_key_env": "OPENAI_API_KEY",
            },
            "lmstudio": {
                "base_url": "http://localhost:1234/v1",
                "default_model": "llama-3.2-3b-instruct",
                "api_key_env": None,
            },
        },
    }


def _merge(defaults: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    """Merge file values over defaults, one level deep per section."""
    result = {key: dict(value) for key, value in defaults.items()}
    for section, values in (data or {}).items():
        if isinstance(values, dict) and section in result:
            result[section].update(values)
        else:
            result[section] = values
    return result


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides."""
    port = os.environ.get(PORT_ENV)
    if port:
        try:
            data["server"]["port"] = int(port)
        except ValueError:
            logger.warning("invalid_port_env", value=port)

    data_dir = os.environ.get(DATA_DIR_ENV)
    if data_dir:
        data["storage"]["data_dir"] = data_dir

    provider = os.environ.get(PROVIDER_ENV)
    if provider:
        data["feedback"]["provider"] = provider

    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    providers = {}
    for name, pconfig in data.get("providers", {}).items():
        providers[name] = ProviderConfig(
            base_url=pconfig.get("base_url"),
            default_model=pconfig.get("default_model", "default"),
            api_key_env=pconfig.get("api_key_env"),
        )

    server_data = data.get("server", {})
    server = ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=int(server_data.get("port", DEFAULT_PORT)),
        max_body_bytes=int(server_data.get("max_body_bytes", DEFAULT_MAX_BODY_BYTES)),
        pages_dir=server_data.get("pages_dir"),
    )

    storage_data = data.get("storage", {})
    storage = StorageConfig(
        data_dir=str(storage_data.get("data_dir", "data")),
        lessons_file=storage_data.get("lessons_file", "lessons.json"),
        history_file=storage_data.get("history_file", "practice_history.json"),
    )

    feedback_data = data.get("feedback", {})
    feedback = FeedbackConfig(
        provider=feedback_data.get("provider", "anthropic"),
        model=feedback_data.get("model"),
        max_tokens=feedback_data.get("max_tokens", 1500),
        temperature=feedback_data.get("temperature", 0.7),
        timeout=feedback_data.get("timeout", 30),
        max_retries=feedback_data.get("max_retries", 1),
    )

    return AppConfig(
        server=server,
        storage=storage,
        feedback=feedback,
        providers=providers,
    )


def load_app_config(
    config_path: Path | None = None,
    force_reload: bool = False,
) -> AppConfig:
    """Load application config from YAML with defaults and env overrides.

    Args:
        config_path: Alternative YAML file. Defaults to CONFIG_FILE.
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload and config_path is None:
        return _cached_config

    path = config_path or CONFIG_FILE
    defaults = _get_defaults()

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        file_data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        data = _merge(defaults, file_data)
    else:
        logger.info("using_default_config")
        data = defaults

    config = _parse_config(_apply_env_overrides(data))
    if config_path is None:
        _cached_config = config
    return config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
