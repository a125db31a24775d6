from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional

FetchErrorKind = Literal["transport", "http_status", "malformed"]

class PriceSnapshot(BaseModel):
    asset_id: str
    price: float
    volume_24h: float = 0.0
    change_24h: float = 0.0

class FetchResult(BaseModel):
    snapshot: Optional[PriceSnapshot] = None
    error: Optional[FetchErrorKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @classmethod
    def success(cls, snapshot: PriceSnapshot) -> "FetchResult":
        return cls(snapshot=snapshot)

    @classmethod
    def failure(cls, error: FetchErrorKind, detail: str = "") -> "FetchResult":
        return cls(error=error, detail=detail or None)

class MutationResult(BaseModel):
    applied: bool = False
    skipped: bool = False
    error: Optional[str] = None

class CommandDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str

    def to_payload(self) -> dict:
        """Body accepted by the application command registry (CHAT_INPUT type)."""
        return {"name": self.name, "description": self.description, "type": 1}
