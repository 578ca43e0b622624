"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiscordConfig(BaseModel):
    """Discord channel configuration."""
    allow_guilds: list[str] = Field(default_factory=list)  # Allowed guild IDs
    allow_channels: list[str] = Field(default_factory=list)  # Allowed channel IDs
    allow_users: list[str] = Field(default_factory=list)  # Allowed user IDs


class PlaygroundConfig(BaseModel):
    """Execution service configuration."""
    url: str = "https://play.rust-lang.org/execute"
    channel: Literal["stable", "beta", "nightly"] = "stable"
    mode: Literal["debug", "release"] = "debug"
    edition: str = "2018"
    crate_type: str = "bin"
    tests: bool = False
    backtrace: bool = False
    timeout: float = 30.0  # Seconds


class OutputConfig(BaseModel):
    """Limits used to route captured output."""
    inline_limit: int = 2000  # Max bytes of a message edited in place
    attachment_limit: int = 8_000_000  # Max bytes uploaded as a file, 0 = never upload
    attachment_filename: str = "output.txt"


class Config(BaseSettings):
    """Root configuration for RustBot."""

    model_config = SettingsConfigDict(
        env_prefix="RUSTBOT_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    # Bot token, read from TOKEN or DISCORD_TOKEN
    token: str = Field(default="", validation_alias=AliasChoices("token", "discord_token"))
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    playground: PlaygroundConfig = Field(default_factory=PlaygroundConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def masked_token(self) -> str:
        """Token safe for display."""
        if not self.token:
            return ""
        if len(self.token) <= 8:
            return "*" * len(self.token)
        return f"{self.token[:4]}...{self.token[-4:]}"
