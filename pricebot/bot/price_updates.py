"""
Scheduled price updates for the bot's presence and, optionally, its username.
"""

import logging
from typing import Optional
import discord
from discord.ext import commands, tasks

from pricebot.config import Settings, get_settings
from pricebot.orchestration.updaters import Fetch, PresenceUpdater, UsernameUpdater
from pricebot.state import PriceCache

logger = logging.getLogger(__name__)


class PriceUpdatesCog(commands.Cog):
    """Runs the presence loop and, if enabled, the username loop."""

    def __init__(
        self,
        bot: discord.Client,
        fetch: Fetch,
        cache: Optional[PriceCache] = None,
        settings: Optional[Settings] = None,
    ):
        self.bot = bot
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else PriceCache()

        label = self.settings.price_label
        self.presence = PresenceUpdater(bot, fetch, self.cache, label)
        self.username = UsernameUpdater(bot, fetch, label)

    async def cog_load(self):
        """Start the loops; the first iteration runs right away once the bot is ready."""
        self.presence_loop.change_interval(minutes=self.settings.presence_interval_minutes)
        self.presence_loop.start()
        logger.info(f"Activity update scheduled every {self.settings.presence_interval_minutes:g} minutes")

        if self.settings.username_updates_enabled:
            self.username_loop.change_interval(minutes=self.settings.username_interval_minutes)
            self.username_loop.start()
            logger.info(f"Username update scheduled every {self.settings.username_interval_minutes:g} minutes")

    async def cog_unload(self):
        """Cleanup when cog is unloaded."""
        self.presence_loop.cancel()
        self.username_loop.cancel()

    @tasks.loop(minutes=5)
    async def presence_loop(self):
        logger.info("Activity update triggered.")
        try:
            await self.presence.tick()
        except Exception as e:
            logger.error(f"Error in activity update: {e}", exc_info=True)

    @tasks.loop(minutes=60)
    async def username_loop(self):
        logger.info("Username update triggered.")
        try:
            await self.username.tick()
        except Exception as e:
            logger.error(f"Error in username update: {e}", exc_info=True)

    @presence_loop.before_loop
    async def before_presence_loop(self):
        """Wait for bot to be ready before starting loop."""
        await self.bot.wait_until_ready()

    @username_loop.before_loop
    async def before_username_loop(self):
        await self.bot.wait_until_ready()
