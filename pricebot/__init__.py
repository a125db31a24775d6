"""Discord bot that shows the DEV token price in its status."""

__version__ = "1.0.0"
