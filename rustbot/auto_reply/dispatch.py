"""
Reply dispatcher for RustBot.

Turns a parsed command into the reply to show:
1. Build the program for the command
2. Run it on the execution service
3. Route the captured output by size
"""

from loguru import logger

from rustbot.auto_reply.commands import CodeCommand
from rustbot.auto_reply.output import OutputMode, Reply, route_output
from rustbot.config.schema import OutputConfig
from rustbot.errors import PlaygroundError, PlaygroundTimeoutError
from rustbot.playground.client import PlaygroundClient

LOADING_MESSAGE = "loading..."
TIMEOUT_MESSAGE = "request timed out, try again later"


class ReplyDispatcher:
    """Runs commands and produces replies, reporting service errors as text."""
    
    def __init__(
        self,
        playground: PlaygroundClient,
        output_config: OutputConfig | None = None,
    ):
        self.playground = playground
        self.output_config = output_config or OutputConfig()
        
        # Stats
        self._processed_count = 0
        self._error_count = 0
    
    async def dispatch(self, command: CodeCommand) -> Reply:
        """
        Run a command and build its reply.
        
        Args:
            command: The parsed command.
        
        Returns:
            Reply to edit the placeholder with.
        """
        self._processed_count += 1
        
        try:
            result = await self.playground.execute(command.program)
        except PlaygroundTimeoutError as e:
            self._error_count += 1
            logger.warning(f"?{command.name} timed out: {e}")
            return Reply(content=TIMEOUT_MESSAGE, mode=OutputMode.ERROR)
        except PlaygroundError as e:
            self._error_count += 1
            logger.error(f"?{command.name} failed: {e}")
            return Reply(content=f"playground error: {e}", mode=OutputMode.ERROR)
        
        reply = route_output(result.output, self.output_config)
        logger.debug(
            f"?{command.name} -> {reply.mode.value} "
            f"({len(result.output)} chars, success={result.success})"
        )
        return reply
    
    def get_stats(self) -> dict[str, int]:
        """Get dispatcher statistics."""
        return {
            "processed": self._processed_count,
            "errors": self._error_count,
        }
