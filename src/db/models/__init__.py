"""Database Models 모듈"""

from src.db.models.storage_entry import StorageEntry

__all__ = [
    "StorageEntry",
]
