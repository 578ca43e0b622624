"""Exception types shared across RustBot."""


class RustBotError(Exception):
    """Base class for RustBot errors."""


class ConfigError(RustBotError):
    """Configuration is missing or invalid."""


class PlaygroundError(RustBotError):
    """The execution service could not run the request."""


class PlaygroundTimeoutError(PlaygroundError):
    """The execution service did not answer in time."""
