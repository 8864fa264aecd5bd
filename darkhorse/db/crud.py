from typing import Optional
from sqlmodel import Session
from darkhorse.db.models import KVEntry, _utcnow


def kv_get(session: Session, key: str) -> Optional[str]:
    row = session.get(KVEntry, key)
    return row.value if row else None


def kv_set(session: Session, key: str, value: str) -> KVEntry:
    row = session.get(KVEntry, key)
    if row is None:
        row = KVEntry(key=key, value=value)
    else:
        row.value = value
        row.ts = _utcnow()
    session.add(row)
    session.commit()
    session.refresh(row)
    return row