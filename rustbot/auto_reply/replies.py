"""
Tracking of bot replies by source message.

Maps the id of a user's message to the reply the bot posted for it, so
the reply can be found again when the user edits the message. Entries
live for the lifetime of the process.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator


class ReplyRegistry:
    """Source message id -> bot reply message, guarded by one lock."""
    
    def __init__(self):
        self._replies: dict[int, Any] = {}
        self._lock = asyncio.Lock()
    
    async def remember(self, source_id: int, reply: Any) -> None:
        """Record the reply posted for a source message."""
        async with self._lock:
            self._replies[source_id] = reply
    
    async def get(self, source_id: int) -> Any | None:
        """Get the reply for a source message, if any."""
        async with self._lock:
            return self._replies.get(source_id)
    
    @asynccontextmanager
    async def hold(self, source_id: int) -> AsyncIterator[Any | None]:
        """
        Get the reply for a source message and keep the lock until exit.
        
        Updates made inside the block run one at a time, in the order
        they asked for the lock, so the last edit always wins.
        """
        async with self._lock:
            yield self._replies.get(source_id)
