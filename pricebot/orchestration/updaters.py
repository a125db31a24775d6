import asyncio
import logging
from typing import Awaitable, Callable, Literal
import discord
from pricebot.formatting import presence_title, presence_state, username_for
from pricebot.services.types import FetchResult, MutationResult, PriceSnapshot
from pricebot.state import PriceCache

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[FetchResult]]
TickOutcome = Literal["updated", "unchanged", "fetch_failed", "mutation_failed", "skipped_overlap"]


class _Updater:
    """Shared tick plumbing: one tick at a time, fetch, then mutate."""

    name = "updater"

    def __init__(self, client: discord.Client, fetch: Fetch, label: str = "DEV"):
        self.client = client
        self.fetch = fetch
        self.label = label
        self._running = asyncio.Lock()

    async def tick(self) -> TickOutcome:
        # A trigger that arrives while the previous tick is still running is dropped
        if self._running.locked():
            logger.warning(f"[{self.name}] Previous tick still running, skipping this trigger")
            return "skipped_overlap"

        async with self._running:
            result = await self.fetch()
            if not result.ok:
                logger.warning(f"[{self.name}] Failed to fetch token price ({result.error}: {result.detail})")
                return "fetch_failed"
            return await self._apply(result.snapshot)

    async def _apply(self, snapshot: PriceSnapshot) -> TickOutcome:
        raise NotImplementedError


class PresenceUpdater(_Updater):
    """Caches the latest price and shows it in the bot's presence."""

    name = "PresenceUpdater"

    def __init__(self, client: discord.Client, fetch: Fetch, cache: PriceCache, label: str = "DEV"):
        super().__init__(client, fetch, label)
        self.cache = cache

    async def _apply(self, snapshot: PriceSnapshot) -> TickOutcome:
        self.cache.update(snapshot)
        logger.info(f"[{self.name}] {snapshot.asset_id} price updated: ${snapshot.price}")

        title = presence_title(snapshot.price, self.label)
        state = presence_state(snapshot.change_24h, snapshot.volume_24h)
        result = await set_watching_presence(self.client, title, state)
        if result.error:
            return "mutation_failed"

        logger.info(f"[{self.name}] Bot activity updated - {title} / {state}")
        return "updated"


class UsernameUpdater(_Updater):
    """Renames the bot to carry the price, only when the name would change."""

    name = "UsernameUpdater"

    async def _apply(self, snapshot: PriceSnapshot) -> TickOutcome:
        result = await rename_if_changed(self.client, username_for(snapshot.price, self.label))
        if result.error:
            return "mutation_failed"
        return "updated" if result.applied else "unchanged"


async def set_watching_presence(client: discord.Client, title: str, state: str) -> MutationResult:
    """Set a "Watching <title>" activity with a free-text state line."""
    activity = discord.Activity(type=discord.ActivityType.watching, name=title, state=state)
    try:
        await client.change_presence(activity=activity)
    except Exception as e:
        logger.error(f"Failed to set bot activity: {e}", exc_info=True)
        return MutationResult(error=str(e) or type(e).__name__)
    return MutationResult(applied=True)


async def rename_if_changed(client: discord.Client, new_username: str) -> MutationResult:
    """
    Rename the bot user unless it already carries new_username.

    Discord allows only a couple of username changes per hour, so a rename
    to the identical name is never sent.
    """
    user = client.user
    if user is None:
        logger.warning("Client user not available yet, skipping username update")
        return MutationResult(skipped=True)

    if user.name == new_username:
        logger.info("Username already up-to-date.")
        return MutationResult(skipped=True)

    try:
        await user.edit(username=new_username)
    except Exception as e:
        logger.error(f"Error updating bot username: {e}", exc_info=True)
        return MutationResult(error=str(e) or type(e).__name__)

    logger.info(f"Bot username updated to: {new_username}")
    return MutationResult(applied=True)
