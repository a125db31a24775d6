import asyncio
import logging
import sys
import discord
from pydantic import ValidationError

from pricebot.bot.client import PriceBot
from pricebot.config import Settings, get_settings
from pricebot.logging_config import setup_logging

logger = logging.getLogger(__name__)

MISSING_TOKEN_HELP = (
    "Please create a .env file in the root directory and add your bot token as "
    "DISCORD_TOKEN=your_token_here. You can also set a BOT_PREFIX in the .env file (e.g., BOT_PREFIX=?)"
)


async def run_bot(settings: Settings) -> None:
    bot = PriceBot(settings)
    async with bot:
        await bot.start(settings.discord_token)


def _fatal(message: str) -> None:
    logger.exception(message)
    print(f"[CONSOLE] {message}", file=sys.stderr)
    sys.exit(1)


def main():
    """Entry point: validate configuration, then run the bot until stopped."""
    setup_logging("INFO")
    try:
        settings = get_settings()
    except ValidationError:
        _fatal("Invalid configuration")

    setup_logging(settings.log_level)
    logger.info("Bot is starting...")

    if not settings.discord_token:
        logger.error("Error: DISCORD_TOKEN is not set.")
        logger.info(MISSING_TOKEN_HELP)
        print("DISCORD_TOKEN is not set. " + MISSING_TOKEN_HELP, file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run_bot(settings))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except discord.LoginFailure:
        _fatal("Discord login failed, check DISCORD_TOKEN")
    except Exception:
        _fatal("Detailed error starting bot")


if __name__ == "__main__":
    main()
