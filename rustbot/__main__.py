"""Allow ``python -m rustbot``."""

from rustbot.cli.commands import app

if __name__ == "__main__":
    app()
