import logging
import sys

def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure application-wide logging."""

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # discord.py logs every gateway event at DEBUG
    logging.getLogger("discord").setLevel(max(root_logger.level, logging.INFO))

    return root_logger

