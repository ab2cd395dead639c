# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import store_snapshot

from .store_snapshot import StoreSnapshot

__all__ = [
    "StoreSnapshot",
]
