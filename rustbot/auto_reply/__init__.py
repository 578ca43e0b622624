"""
Auto-reply system for RustBot.

Provides message handling for code commands:
- Command detection and parsing
- Output routing by size
- Reply tracking for edits
- Dispatch to the execution service
"""

from rustbot.auto_reply.commands import (
    HELP_TEXT,
    CodeCommand,
    is_help,
    parse_command,
)
from rustbot.auto_reply.output import (
    OutputMode,
    Reply,
    route_output,
)
from rustbot.auto_reply.replies import ReplyRegistry
from rustbot.auto_reply.dispatch import (
    LOADING_MESSAGE,
    ReplyDispatcher,
)

__all__ = [
    # Commands
    "HELP_TEXT",
    "CodeCommand",
    "is_help",
    "parse_command",
    # Output
    "OutputMode",
    "Reply",
    "route_output",
    # Replies
    "ReplyRegistry",
    # Dispatch
    "LOADING_MESSAGE",
    "ReplyDispatcher",
]
