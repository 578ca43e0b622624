"""
Output routing for RustBot.

Captured program output is delivered one of three ways depending on size:
- INLINE: the placeholder message is edited to a code block
- ATTACHMENT: the output is uploaded as a text file
- TOO_LONG: the user is asked to run the code themselves

ERROR replies carry the text of an execution service failure.
"""

from dataclasses import dataclass
from enum import Enum

from rustbot.config.schema import OutputConfig

TOO_LONG_MESSAGE = "response too long, manually evaluate!"
ATTACHMENT_MESSAGE = "output too long for a message, see the attached file"


class OutputMode(str, Enum):
    """How a reply is delivered."""
    INLINE = "inline"
    ATTACHMENT = "attachment"
    TOO_LONG = "too_long"
    ERROR = "error"


@dataclass
class Reply:
    """Content the placeholder message should be edited to."""
    content: str
    mode: OutputMode = OutputMode.INLINE
    attachment: bytes | None = None
    filename: str = ""


def code_block(text: str) -> str:
    """Wrap text in a code fence."""
    if text and not text.endswith("\n"):
        text += "\n"
    return f"```\n{text}```"


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def route_output(output: str, config: OutputConfig | None = None) -> Reply:
    """
    Pick the delivery mode for captured output.
    
    Args:
        output: Captured stdout or stderr.
        config: Size limits.
    
    Returns:
        Reply describing the edit to make.
    """
    config = config or OutputConfig()
    
    wrapped = code_block(output)
    if byte_length(wrapped) <= config.inline_limit:
        return Reply(content=wrapped, mode=OutputMode.INLINE)
    
    data = output.encode("utf-8")
    if len(data) <= config.attachment_limit:
        return Reply(
            content=ATTACHMENT_MESSAGE,
            mode=OutputMode.ATTACHMENT,
            attachment=data,
            filename=config.attachment_filename,
        )
    
    return Reply(content=TOO_LONG_MESSAGE, mode=OutputMode.TOO_LONG)
