"""
StorageEntry 모델
"""
from sqlalchemy import Column, String, Text, DateTime
from src.db.base import Base
from src.utils.helpers import utc_now


class StorageEntry(Base):
    """소유자별 key-value 저장 테이블 (key: {namespace}-{ownerId}, value: JSON)"""
    __tablename__ = "storage_entry"

    storage_key = Column(String(255), primary_key=True)
    payload = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
