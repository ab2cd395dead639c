"""
Write-behind snapshots of the in-memory store.

The repository is the source of truth. After a successful mutation the
router schedules persist_snapshot() as a background task; a failed write is
logged and never undoes the in-memory transition.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.store_snapshot import StoreSnapshot
from app.services.repository import HRRepository

logger = logging.getLogger(__name__)

Document = Dict[str, List[Dict[str, Any]]]


class SnapshotStore:
    """One row per logical store, payload holding that store's JSON list."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def save(self, document: Document) -> None:
        db = self._session_factory()
        try:
            for name, payload in document.items():
                row = db.get(StoreSnapshot, name)
                if row is None:
                    db.add(StoreSnapshot(name=name, payload=payload))
                else:
                    row.payload = payload
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def load(self) -> Optional[Document]:
        db = self._session_factory()
        try:
            rows = db.query(StoreSnapshot).filter(StoreSnapshot.name.in_(HRRepository.STORES)).all()
            if not rows:
                return None
            return {row.name: row.payload for row in rows}
        finally:
            db.close()

    def clear(self) -> None:
        db = self._session_factory()
        try:
            db.query(StoreSnapshot).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def persist_snapshot(store: SnapshotStore, repository: HRRepository) -> None:
    """Background task body. Never raises."""
    try:
        store.save(repository.to_document())
        logger.debug("State snapshot written")
    except Exception as e:
        logger.error(f"State snapshot write failed: {e}", exc_info=True)


def restore_snapshot(store: SnapshotStore, repository: HRRepository) -> bool:
    """Load the last snapshot into repository. False when nothing was stored."""
    document = store.load()
    if document is None:
        return False
    repository.load_document(document)
    return True
