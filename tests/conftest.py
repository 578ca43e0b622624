"""
Pytest configuration and shared fixtures for RustBot tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep real credentials and a local .env out of the tests."""
    for name in ("TOKEN", "DISCORD_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def playground_calls():
    """Request bodies received by the fake execution service."""
    return []


@pytest.fixture
def playground_response():
    """Response the fake execution service returns; tests may mutate it."""
    return {"stdout": "hello\n", "stderr": "", "success": True}


@pytest.fixture
def playground_transport(playground_calls, playground_response):
    """httpx transport standing in for the execution service."""

    def handler(request: httpx.Request) -> httpx.Response:
        playground_calls.append(json.loads(request.content))
        return httpx.Response(200, json=playground_response)

    return httpx.MockTransport(handler)


@pytest.fixture
def playground(playground_transport):
    """PlaygroundClient wired to the fake transport."""
    from rustbot.playground.client import PlaygroundClient

    return PlaygroundClient(client=httpx.AsyncClient(transport=playground_transport))


def make_message(content: str, message_id: int = 1, bot: bool = False) -> MagicMock:
    """Build a discord.Message stand-in whose channel returns a sendable reply."""
    reply = MagicMock()
    reply.id = 1000 + message_id
    reply.edit = AsyncMock(return_value=reply)

    message = MagicMock()
    message.id = message_id
    message.content = content
    message.author.bot = bot
    message.author.id = 42
    message.guild.id = 7
    message.channel.id = 99
    message.channel.send = AsyncMock(return_value=reply)
    return message


@pytest.fixture
def message_factory():
    """Factory for discord.Message stand-ins."""
    return make_message
