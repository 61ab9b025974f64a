"""
소유자별 key-value 저장소 모듈

사건 저장소는 `{namespace}-{ownerId}` 키 아래에 사건 목록 전체를 JSON 문자열로 저장한다.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from src.db.connection import DatabaseManager
from src.db.models.storage_entry import StorageEntry
from src.utils.exceptions import StorageError
from src.utils.logger import get_logger

logger = get_logger(__name__)


def build_storage_key(namespace: str, owner_id: str) -> str:
    """
    소유자별 저장 키 생성

    Args:
        namespace: 저장 네임스페이스
        owner_id: 소유자 ID

    Returns:
        저장 키 ({namespace}-{ownerId})
    """
    return f"{namespace}-{owner_id}"


class KeyValueStore(ABC):
    """문자열 key-value 저장소 인터페이스"""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """키에 저장된 값 조회 (없으면 None)"""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """키에 값 저장 (덮어쓰기)"""


class InMemoryKeyValueStore(KeyValueStore):
    """프로세스 메모리 저장소 (테스트/개발용)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class SqlKeyValueStore(KeyValueStore):
    """SQLAlchemy 기반 영속 저장소"""

    def __init__(self, database: DatabaseManager):
        self.database = database

    def read(self, key: str) -> Optional[str]:
        """
        값 조회

        Args:
            key: 저장 키

        Returns:
            저장된 JSON 문자열 또는 None (키 없음)

        Raises:
            StorageError: 조회 실패 시
        """
        try:
            with self.database.get_db_session() as session:
                entry = session.get(StorageEntry, key)
                return entry.payload if entry else None
        except SQLAlchemyError as e:
            logger.error(f"저장소 조회 실패: key={key} - {str(e)}")
            raise StorageError(str(e)) from e

    def write(self, key: str, value: str) -> None:
        """
        값 저장

        Args:
            key: 저장 키
            value: JSON 문자열

        Raises:
            StorageError: 저장 실패 시
        """
        try:
            with self.database.get_db_session() as session:
                entry = session.get(StorageEntry, key)
                if entry is None:
                    session.add(StorageEntry(storage_key=key, payload=value))
                else:
                    entry.payload = value
            logger.debug(f"저장소 저장 완료: key={key}, {len(value)} bytes")
        except SQLAlchemyError as e:
            logger.error(f"저장소 저장 실패: key={key} - {str(e)}")
            raise StorageError(str(e)) from e

