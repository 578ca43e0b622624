"""
Discord channel integration for RustBot.

Uses discord.py for bot functionality with support for:
- ?help, ?eval and ?play commands
- Re-running a command when its message is edited
- Guild/channel/user allowlists
- Large output uploaded as a file
"""

import io
from typing import Any

import discord
from loguru import logger

from rustbot.auto_reply.commands import HELP_TEXT, is_help, parse_command
from rustbot.auto_reply.dispatch import LOADING_MESSAGE, ReplyDispatcher
from rustbot.auto_reply.output import OutputMode, Reply
from rustbot.auto_reply.replies import ReplyRegistry
from rustbot.config.schema import DiscordConfig


class DiscordChannel:
    """
    Discord channel implementation using discord.py.
    
    Configuration (via DiscordConfig):
    - allow_guilds: List of allowed guild IDs (empty = all)
    - allow_channels: List of allowed channel IDs (empty = all)
    - allow_users: List of allowed user IDs (empty = all)
    """
    
    name = "discord"
    
    def __init__(
        self,
        config: DiscordConfig,
        dispatcher: ReplyDispatcher,
        replies: ReplyRegistry | None = None,
    ):
        """
        Initialize Discord channel.
        
        Args:
            config: Discord configuration.
            dispatcher: Runs commands and builds replies.
            replies: Registry of posted replies, shared across events.
        """
        self.dispatcher = dispatcher
        self.replies = replies or ReplyRegistry()
        self.allow_guilds = set(config.allow_guilds or [])
        self.allow_channels = set(config.allow_channels or [])
        self.allow_users = set(config.allow_users or [])
        
        # Discord client setup
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guild_messages = True
        intents.dm_messages = True
        
        self.client = discord.Client(intents=intents)
        self._running = False
        
        self._setup_handlers()
    
    def _setup_handlers(self) -> None:
        """Set up Discord event handlers."""
        
        @self.client.event
        async def on_ready():
            logger.info(f"Logged in as {self.client.user}!")
        
        @self.client.event
        async def on_message(message: discord.Message):
            await self.handle_message(message)
        
        # Raw event so edits of messages outside the cache are seen too
        @self.client.event
        async def on_raw_message_edit(payload: discord.RawMessageUpdateEvent):
            await self.handle_edit(payload.message_id, payload.data.get("content"))
    
    def _is_allowed_message(self, message: discord.Message) -> bool:
        """Check if message sender is allowed."""
        user_id = str(message.author.id)
        
        if self.allow_users and user_id not in self.allow_users:
            return False
        
        # Check guild allowlist (skip for DMs)
        if message.guild:
            guild_id = str(message.guild.id)
            if self.allow_guilds and guild_id not in self.allow_guilds:
                return False
            
            channel_id = str(message.channel.id)
            if self.allow_channels and channel_id not in self.allow_channels:
                return False
        
        return True
    
    async def handle_message(self, message: discord.Message) -> None:
        """Handle a newly created message."""
        # Ignore own messages and other bots
        if message.author == self.client.user or message.author.bot:
            return
        
        if not self._is_allowed_message(message):
            return
        
        content = message.content or ""
        
        if is_help(content):
            await self._send(message.channel, HELP_TEXT)
            return
        
        command = parse_command(content)
        if command is None:
            return
        
        logger.info(f"?{command.name} from {message.author} in channel {message.channel.id}")
        
        placeholder = await self._send(message.channel, LOADING_MESSAGE)
        if placeholder is None:
            return
        
        reply = await self.dispatcher.dispatch(command)
        await self._apply_reply(placeholder, reply)
        await self.replies.remember(message.id, placeholder)
    
    async def handle_edit(self, message_id: int, content: str | None) -> None:
        """
        Re-run the command of an edited message and update its reply.
        
        Args:
            message_id: ID of the edited message.
            content: New content, or None when the edit did not touch it.
        """
        if content is None:
            return
        
        # Held across the re-run so rapid edits finish in the order they arrived
        async with self.replies.hold(message_id) as reply_message:
            if reply_message is None:
                return
            
            command = parse_command(content)
            if command is None:
                logger.debug(f"Edited message {message_id} no longer holds a command")
                return
            
            logger.info(f"?{command.name} re-run for edited message {message_id}")
            
            if not await self._edit(reply_message, content=LOADING_MESSAGE):
                return
            
            reply = await self.dispatcher.dispatch(command)
            await self._apply_reply(reply_message, reply)
    
    async def _apply_reply(self, message: Any, reply: Reply) -> bool:
        """Edit a placeholder to show a reply."""
        if reply.mode == OutputMode.ATTACHMENT:
            file = discord.File(io.BytesIO(reply.attachment or b""), filename=reply.filename)
            return await self._edit(message, content=reply.content, attachments=[file])
        
        # Drop any file left over from an earlier result
        return await self._edit(message, content=reply.content, attachments=[])
    
    async def _send(self, channel: Any, content: str) -> Any | None:
        """Send a message, returning None on failure."""
        try:
            return await channel.send(content)
        except discord.HTTPException as e:
            logger.error(f"Failed to send Discord message: {e}")
            return None
    
    async def _edit(self, message: Any, **fields: Any) -> bool:
        """Edit a message, returning False on failure."""
        try:
            await message.edit(**fields)
            return True
        except discord.HTTPException as e:
            logger.error(f"Failed to edit Discord message {message.id}: {e}")
            return False
    
    async def start(self, token: str) -> None:
        """Start the Discord bot and block until it disconnects."""
        logger.info("Starting Discord channel")
        self._running = True
        try:
            await self.client.start(token)
        finally:
            self._running = False
    
    async def stop(self) -> None:
        """Stop the Discord bot."""
        logger.info("Stopping Discord channel")
        self._running = False
        await self.client.close()
    
    @property
    def is_running(self) -> bool:
        """Check if the channel is running."""
        return self._running and self.client.is_ready()
