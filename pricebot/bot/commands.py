"""
Slash commands: the static descriptor list, name-based dispatch, and the
one-time reconciliation of that list with Discord's command registry.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, Tuple
import discord
from pricebot.formatting import PRICE_UNAVAILABLE_REPLY, price_reply
from pricebot.services.types import CommandDescriptor, FetchResult

logger = logging.getLogger(__name__)

COMMANDS: Tuple[CommandDescriptor, ...] = (
    CommandDescriptor(name="ping", description="Replies with Pong!"),
    CommandDescriptor(name="price", description="Fetches and displays the current DEV token price."),
)


async def dispatch_command(
    name: str,
    fetch: Callable[[], Awaitable[FetchResult]],
    label: str = "DEV",
) -> Optional[str]:
    """
    Build the reply for an inbound command.

    Args:
        name: Command name from the interaction
        fetch: Fresh price lookup; the presence cache is deliberately not used
        label: Token label shown in the reply

    Returns:
        Reply text, or None for a command this bot does not know
    """
    if name == "ping":
        return "Pong!"

    if name == "price":
        result = await fetch()
        if result.ok:
            return price_reply(result.snapshot.price, label)
        return PRICE_UNAVAILABLE_REPLY

    return None


class CommandRegistry(Protocol):
    async def fetch(self) -> List[dict]: ...

    async def delete(self, command_id: str) -> None: ...

    async def bulk_register(self, payload: List[dict]) -> None: ...


class DiscordCommandRegistry:
    """Global application commands, through discord.py's REST client."""

    def __init__(self, http: discord.http.HTTPClient, application_id: int):
        self.http = http
        self.application_id = application_id

    async def fetch(self) -> List[dict]:
        return await self.http.get_global_commands(self.application_id)

    async def delete(self, command_id: str) -> None:
        await self.http.delete_global_command(self.application_id, command_id)

    async def bulk_register(self, payload: List[dict]) -> None:
        await self.http.bulk_upsert_global_commands(self.application_id, payload)


@dataclass
class ReconcileReport:
    deleted: List[str] = field(default_factory=list)
    registered: List[str] = field(default_factory=list)


async def reconcile_commands(
    registry: CommandRegistry,
    descriptors: Sequence[CommandDescriptor] = COMMANDS,
) -> ReconcileReport:
    """
    Make the remote command set match the local descriptor list.

    Remote commands with no local counterpart are deleted one by one. If any
    local command is missing remotely, the whole local list is sent in one
    bulk upsert. Errors propagate: a failed registration is a startup failure.
    """
    report = ReconcileReport()
    local_names = {d.name for d in descriptors}

    existing = await registry.fetch()
    remote_names = {c.get("name") for c in existing}

    for command in existing:
        if command.get("name") in local_names:
            continue
        await registry.delete(command["id"])
        report.deleted.append(command["name"])
        logger.info(f"Deleted unused command: {command['name']}")

    missing = [d.name for d in descriptors if d.name not in remote_names]
    if missing:
        logger.info("Registering new slash commands...")
        await registry.bulk_register([d.to_payload() for d in descriptors])
        report.registered.extend(missing)
        for name in missing:
            logger.info(f"Slash command created/updated: {name}")

    return report
