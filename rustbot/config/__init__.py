"""Configuration for RustBot."""

from rustbot.config.loader import load_config, require_token
from rustbot.config.schema import Config, DiscordConfig, OutputConfig, PlaygroundConfig

__all__ = [
    "Config",
    "DiscordConfig",
    "OutputConfig",
    "PlaygroundConfig",
    "load_config",
    "require_token",
]
