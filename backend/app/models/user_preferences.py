from sqlalchemy import Column, Integer, Text, DateTime, UniqueConstraint
from app.db.base import Base


# One JSON blob per storage key (mirrors the browser local-storage layout)
class StoredPreferences(Base):
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True)
    storage_key = Column(Text, nullable=False)
    payload = Column(Text, nullable=False)  # serialized UserPreferences
    updated_at = Column(DateTime, nullable=False)

    __table_args__ = (UniqueConstraint("storage_key", name="uq_storage_key"),)
