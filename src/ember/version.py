"""Version of the EMBER package."""

__version__ = "0.1.0"
