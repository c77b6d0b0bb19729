"""Discord <-> IRC relay."""

from discord_irc.errors import BridgeError, ConfigurationError

__version__ = "0.1.0"

__all__ = ["BridgeError", "ConfigurationError", "__version__"]
