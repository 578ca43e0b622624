"""
Command detection and parsing for RustBot.

Supports:
- ?help
- ?eval and ?play followed by a ```rust fenced block
"""

import re
from dataclasses import dataclass

from rustbot import __version__

HELP_COMMAND = "?help"

CODE_COMMAND_RE = re.compile(r"\?(eval|play)\s+```rust\n([\s\S]*?)\n+```")

HELP_TEXT = f"""```RustBot v{__version__}

USAGE:
    ?help | ?eval | ?play {{ rust codeblock }}

COMMANDS:
    ?help - display this help command
    ?eval - evaluate the code and Debug the result
    ?play - execute code and send stdout/stderr (equivalent to local run)
```"""


@dataclass
class CodeCommand:
    """A parsed ?eval or ?play command."""
    name: str  # "eval" or "play"
    code: str  # Body of the rust code block
    raw: str = ""  # Full matched text
    
    @property
    def program(self) -> str:
        """Complete program to send to the execution service."""
        if self.name == "eval":
            return wrap_eval(self.code)
        return self.code


def wrap_eval(code: str) -> str:
    """Wrap an expression block so its Debug representation is printed."""
    return f'fn main() {{ println!("{{:?}}", {{ {code} }}) }}'


def is_help(content: str) -> bool:
    """Check if a message asks for help."""
    return content.strip() == HELP_COMMAND


def parse_command(content: str) -> CodeCommand | None:
    """
    Extract a code command from message content.
    
    The command may appear anywhere in the message; only the first one
    is used.
    
    Examples:
        ?play ```rust\\nfn main() {}\\n``` -> CodeCommand(name="play", ...)
        ?eval ```rust\\n1 + 1\\n``` -> CodeCommand(name="eval", code="1 + 1")
        ?eval ```\\n1 + 1\\n``` -> None
    
    Args:
        content: Full message content.
    
    Returns:
        Parsed CodeCommand or None if the message holds no valid command.
    """
    if not content:
        return None
    
    match = CODE_COMMAND_RE.search(content)
    if not match:
        return None
    
    return CodeCommand(name=match.group(1), code=match.group(2), raw=match.group(0))
