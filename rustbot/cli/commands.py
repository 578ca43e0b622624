"""CLI commands for RustBot."""

import asyncio
import logging
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rustbot import __version__, __logo__

app = typer.Typer(
    name="rustbot",
    help=f"{__logo__} RustBot - Rust playground for Discord",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} RustBot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """RustBot - Rust playground for Discord."""
    pass


# ============================================================================
# Logging
# ============================================================================


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (discord.py, httpx) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(verbose: bool = False) -> None:
    """Configure a single stderr sink and route stdlib logging into it."""
    level = "DEBUG" if verbose else "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level)
    logging.basicConfig(
        handlers=[InterceptHandler()],
        level=logging.DEBUG if verbose else logging.INFO,
        force=True,
    )

    # httpx logs every request at INFO
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _load(env_file: Path | None):
    from rustbot.config.loader import load_config
    from rustbot.errors import ConfigError

    try:
        return load_config(env_file)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# Bot
# ============================================================================


@app.command()
def run(
    env_file: Path = typer.Option(None, "--env-file", "-e", help="Dotenv file with TOKEN"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Start the Discord bot."""
    import discord

    from rustbot.auto_reply.dispatch import ReplyDispatcher
    from rustbot.channels.discord import DiscordChannel
    from rustbot.config.loader import require_token
    from rustbot.errors import ConfigError
    from rustbot.playground.client import PlaygroundClient

    setup_logging(verbose)
    config = _load(env_file)

    try:
        token = require_token(config)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"{__logo__} Starting RustBot v{__version__}...")
    console.print(f"[green]✓[/green] Playground: {config.playground.url} ({config.playground.channel}, {config.playground.edition})")

    async def start():
        playground = PlaygroundClient(config.playground)
        dispatcher = ReplyDispatcher(playground, config.output)
        channel = DiscordChannel(config.discord, dispatcher)
        try:
            await channel.start(token)
        finally:
            await channel.stop()
            await playground.close()

    try:
        asyncio.run(start())
    except discord.LoginFailure as e:
        console.print(f"[red]Error: login failed: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\nShutting down...")


# ============================================================================
# Local evaluation
# ============================================================================


@app.command("eval")
def eval_command(
    source: str = typer.Argument("-", help="File with Rust code, or - for stdin"),
    play: bool = typer.Option(False, "--play", help="Run as a full program instead of an expression"),
    env_file: Path = typer.Option(None, "--env-file", "-e", help="Dotenv file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Run a snippet on the playground the way the bot would."""
    from rustbot.auto_reply.commands import CodeCommand
    from rustbot.auto_reply.dispatch import ReplyDispatcher
    from rustbot.auto_reply.output import OutputMode
    from rustbot.playground.client import PlaygroundClient

    setup_logging(verbose)
    config = _load(env_file)

    if source == "-":
        code = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            console.print(f"[red]Error: {path} not found[/red]")
            raise typer.Exit(1)
        code = path.read_text()

    command = CodeCommand(name="play" if play else "eval", code=code.strip("\n"))

    async def evaluate():
        async with PlaygroundClient(config.playground) as playground:
            return await ReplyDispatcher(playground, config.output).dispatch(command)

    reply = asyncio.run(evaluate())

    if reply.mode == OutputMode.ATTACHMENT:
        console.print(f"[dim]{reply.content} ({reply.filename}, {len(reply.attachment or b'')} bytes)[/dim]")
        console.print(reply.attachment.decode("utf-8", errors="replace"), markup=False)
    else:
        console.print(reply.content, markup=False)

    if reply.mode == OutputMode.ERROR:
        raise typer.Exit(1)


# ============================================================================
# Config
# ============================================================================


@app.command("config")
def show_config(
    env_file: Path = typer.Option(None, "--env-file", "-e", help="Dotenv file"),
):
    """Show the resolved configuration."""
    config = _load(env_file)

    table = Table(title="RustBot Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("token", escape(config.masked_token) or "[red]not set[/red]")
    for section in ("discord", "playground", "output"):
        for key, value in getattr(config, section).model_dump().items():
            table.add_row(f"{section}.{key}", escape(str(value)))

    console.print(table)


if __name__ == "__main__":
    app()
