"""Client for the Rust playground execution service."""

from rustbot.playground.client import (
    ExecuteRequest,
    ExecuteResponse,
    PlaygroundClient,
)

__all__ = [
    "ExecuteRequest",
    "ExecuteResponse",
    "PlaygroundClient",
]
