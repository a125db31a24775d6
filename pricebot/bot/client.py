"""
Discord client for the DEV price bot.

Registers the slash commands, keeps them in sync with Discord on startup,
and schedules the presence (and optional username) price updates.
"""

import logging
from typing import Optional
import discord
import httpx
from discord import app_commands
from discord.ext import commands

from pricebot.bot.commands import COMMANDS, DiscordCommandRegistry, dispatch_command, reconcile_commands
from pricebot.bot.price_updates import PriceUpdatesCog
from pricebot.config import Settings, get_settings
from pricebot.services.coingecko_client import fetch_token_price
from pricebot.services.types import FetchResult
from pricebot.state import PriceCache

logger = logging.getLogger(__name__)


class PriceCommandTree(app_commands.CommandTree):
    """Command tree that ignores commands it does not know."""

    async def on_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError) -> None:
        if isinstance(error, app_commands.CommandNotFound):
            return
        await super().on_error(interaction, error)


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    intents.members = True
    return intents


class PriceBot(commands.Bot):
    """Bot showing the DEV token price in its status and answering /ping and /price."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        super().__init__(
            command_prefix=self.settings.bot_prefix,
            intents=build_intents(),
            tree_cls=PriceCommandTree,
        )
        self.cache = PriceCache()
        self.http_session: Optional[httpx.AsyncClient] = None

        for descriptor in COMMANDS:
            self.tree.add_command(
                app_commands.Command(
                    name=descriptor.name,
                    description=descriptor.description,
                    callback=self._command_callback(descriptor.name),
                )
            )

    def _command_callback(self, name: str):
        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_command(interaction, name)
        return callback

    async def fetch_price(self) -> FetchResult:
        return await fetch_token_price(
            self.settings.price_asset_id,
            client=self.http_session,
            settings=self.settings,
        )

    async def handle_command(self, interaction: discord.Interaction, name: str) -> None:
        reply = await dispatch_command(name, self.fetch_price, self.settings.price_label)
        if reply is None:
            return
        await interaction.response.send_message(reply)

    def get_latest_price(self) -> Optional[float]:
        """Latest price seen by the presence updater, or None."""
        return self.cache.get_latest()

    async def setup_hook(self) -> None:
        self.http_session = httpx.AsyncClient()

        registry = DiscordCommandRegistry(self.http, self.application_id)
        report = await reconcile_commands(registry, COMMANDS)
        logger.info(
            f"Slash commands reconciled: {len(report.deleted)} deleted, {len(report.registered)} registered"
        )

        logger.info("Initializing scheduled price updates...")
        await self.add_cog(PriceUpdatesCog(self, self.fetch_price, self.cache, self.settings))
        logger.info("Scheduled price updates initialized.")

    async def on_ready(self):
        logger.info(f"Ready! Logged in as {self.user}")

    async def close(self) -> None:
        if self.http_session is not None:
            await self.http_session.aclose()
            self.http_session = None
        await super().close()
