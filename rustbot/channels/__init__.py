"""Chat channels for RustBot."""

from rustbot.channels.discord import DiscordChannel

__all__ = ["DiscordChannel"]
