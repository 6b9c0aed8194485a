"""Configuration package for Tone Trainer."""

from tonetrainer.config.app_config import (
    AppConfig,
    FeedbackConfig,
    ProviderConfig,
    ServerConfig,
    StorageConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "FeedbackConfig",
    "ProviderConfig",
    "ServerConfig",
    "StorageConfig",
    "clear_config_cache",
    "load_app_config",
]
