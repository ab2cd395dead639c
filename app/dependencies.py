"""
Shared FastAPI dependencies.

The repository and snapshot store live on app.state (created in the
lifespan), so tests can swap them per client.
"""
from typing import Callable, Optional

from fastapi import BackgroundTasks, Depends, Request

from app.services.persistence import SnapshotStore, persist_snapshot
from app.services.repository import HRRepository


def get_repository(request: Request) -> HRRepository:
    return request.app.state.repository


def get_snapshot_store(request: Request) -> Optional[SnapshotStore]:
    return getattr(request.app.state, "snapshot_store", None)


def get_state_writer(
    background_tasks: BackgroundTasks,
    repository: HRRepository = Depends(get_repository),
    store: Optional[SnapshotStore] = Depends(get_snapshot_store),
) -> Callable[[], None]:
    """
    Returns a callable that schedules a write-behind snapshot once the
    response has been sent. No-op when persistence is disabled.
    """
    def persist() -> None:
        if store is not None:
            background_tasks.add_task(persist_snapshot, store, repository)
    return persist


__all__ = [
    "get_repository",
    "get_snapshot_store",
    "get_state_writer",
]
