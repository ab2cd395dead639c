from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from app.database import Base


class StoreSnapshot(Base):
    """Latest JSON document of one logical store (employees, leaves, ...)."""
    __tablename__ = "store_snapshots"

    name = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StoreSnapshot {self.name}>"
