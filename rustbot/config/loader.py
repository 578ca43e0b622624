"""Configuration loading utilities."""

from pathlib import Path

from loguru import logger

from rustbot.config.schema import Config
from rustbot.errors import ConfigError


def load_config(env_file: Path | None = None) -> Config:
    """
    Load configuration from the environment.

    Args:
        env_file: Optional dotenv file. Defaults to ``.env`` in the working directory.

    Returns:
        Loaded configuration object.
    """
    if env_file is None:
        return Config()

    if not env_file.exists():
        raise ConfigError(f"Env file not found: {env_file}")

    logger.debug(f"Loading settings from {env_file}")
    return Config(_env_file=env_file)


def require_token(config: Config) -> str:
    """Return the bot token or raise if it is not set."""
    if not config.token:
        raise ConfigError("TOKEN is required. Set it in the environment or in .env")
    return config.token
