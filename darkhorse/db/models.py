from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KVEntry(SQLModel, table=True):
    key: str = Field(primary_key=True)
    value: str  # JSON-encoded blob
    ts: datetime = Field(default_factory=_utcnow, index=True)
