from datetime import datetime, timezone
from typing import Optional
from pricebot.services.types import PriceSnapshot

class PriceCache:
    """
    Most recent successfully fetched price.

    Last write wins and no history is kept. Only the presence updater writes
    to it. Everything runs on one event loop, so there is no lock.
    """

    def __init__(self):
        self._snapshot: Optional[PriceSnapshot] = None
        self._updated_at: Optional[datetime] = None

    def update(self, snapshot: PriceSnapshot) -> None:
        self._snapshot = snapshot
        self._updated_at = datetime.now(timezone.utc)

    def get_latest(self) -> Optional[float]:
        """Latest price, or None if no fetch has succeeded yet."""
        return self._snapshot.price if self._snapshot else None

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at
