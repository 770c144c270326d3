"""daemon-bridge: authenticated proxy between a server panel and node daemons."""

__version__ = "0.1.0"

__all__ = ["__version__"]
