"""
사건 진행 조회 결과 캐싱 모듈
동일한 등록번호에 대한 중복 외부 호출 방지
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional
from src.utils.helpers import normalize_registry_number, utc_now
from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CachedLookupEntry:
    """캐시 항목 (key는 정규화된 등록번호)"""
    key: str
    result: Any
    stored_at: datetime


class LookupCache:
    """
    사건 진행 조회 캐시 클래스

    ttl_seconds가 None이면 항목은 프로세스가 살아 있는 동안 계속 유효하다.
    잠금은 없으며 같은 키에 대한 동시 저장은 마지막 값이 남는다.
    """

    def __init__(self, ttl_seconds: Optional[int] = None, clock: Optional[Callable[[], datetime]] = None):
        """
        조회 캐시 초기화

        Args:
            ttl_seconds: 캐시 유효 시간 (초, None이면 만료 없음)
            clock: 현재 시각 함수 (테스트 주입용)
        """
        self.cache: Dict[str, CachedLookupEntry] = {}
        self.ttl_seconds = ttl_seconds
        self.clock = clock or utc_now
        logger.info(f"조회 캐시 초기화: TTL={'없음' if ttl_seconds is None else f'{ttl_seconds}초'}")

    def _is_expired(self, entry: CachedLookupEntry, now: datetime) -> bool:
        if self.ttl_seconds is None:
            return False
        return now - entry.stored_at >= timedelta(seconds=self.ttl_seconds)

    def get(self, key: str) -> Optional[CachedLookupEntry]:
        """
        캐시 조회

        Args:
            key: 등록번호 (대소문자/앞뒤 공백 무관)

        Returns:
            캐시 항목 또는 None (미스)
        """
        cache_key = normalize_registry_number(key)
        entry = self.cache.get(cache_key)

        if entry is None:
            logger.debug(f"조회 캐시 미스: key={cache_key}")
            return None

        if self._is_expired(entry, self.clock()):
            del self.cache[cache_key]
            logger.debug(f"조회 캐시 만료: key={cache_key}")
            return None

        logger.debug(f"조회 캐시 히트: key={cache_key}")
        return entry

    def put(self, key: str, result: Any) -> CachedLookupEntry:
        """
        캐시 저장

        Args:
            key: 등록번호
            result: 조회 결과

        Returns:
            저장된 캐시 항목
        """
        cache_key = normalize_registry_number(key)
        entry = CachedLookupEntry(key=cache_key, result=result, stored_at=self.clock())
        self.cache[cache_key] = entry
        logger.debug(f"조회 캐시 저장: key={cache_key}")
        return entry

    def clear(self) -> int:
        """캐시 전체 삭제"""
        count = len(self.cache)
        self.cache.clear()
        logger.info(f"조회 캐시 전체 삭제: {count}개 항목")
        return count

    def clear_expired(self) -> int:
        """만료된 캐시만 삭제"""
        now = self.clock()
        expired_keys = [key for key, entry in self.cache.items() if self._is_expired(entry, now)]

        for key in expired_keys:
            del self.cache[key]

        if expired_keys:
            logger.info(f"조회 캐시 만료 항목 삭제: {len(expired_keys)}개")

        return len(expired_keys)

    def get_stats(self) -> Dict[str, Any]:
        """
        캐시 통계 조회

        Returns:
            통계 딕셔너리
        """
        now = self.clock()
        total_count = len(self.cache)
        expired_count = sum(1 for entry in self.cache.values() if self._is_expired(entry, now))

        return {
            "total_entries": total_count,
            "expired_entries": expired_count,
            "active_entries": total_count - expired_count,
            "ttl_seconds": self.ttl_seconds
        }

    def __len__(self) -> int:
        return len(self.cache)
