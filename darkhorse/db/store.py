import logging
from typing import Optional, Protocol
from sqlmodel import Session
from darkhorse.db.crud import kv_get, kv_set

logger = logging.getLogger(__name__)


class Store(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class SqlStore:
    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> Optional[str]:
        return kv_get(self.session, key)

    def set(self, key: str, value: str) -> None:
        kv_set(self.session, key, value)
        logger.debug("stored %s (%d bytes)", key, len(value))


class MemoryStore:
    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
