"""
eCourts 사건 진행 조회 서비스 모듈
"""
from typing import Any, Dict, Optional
import requests
from config.settings import settings
from src.services.lookup_cache import LookupCache
from src.types import CaseStatusRecord, CaseStatusResult
from src.utils.constants import (
    LookupSource,
    ECOURTS_FIELD_MAPPING,
    NOT_AVAILABLE,
    REGISTRY_NUMBER_LENGTH,
    REGISTRY_NUMBER_FORMAT_MESSAGE,
)
from src.utils.exceptions import InvalidInputError, CaseStatusNotFoundError, CaseStatusLookupError
from src.utils.helpers import normalize_registry_number
from src.utils.logger import get_logger

logger = get_logger(__name__)


def validate_registry_number(registry_number: str) -> str:
    """
    등록번호(CNR) 검증

    Args:
        registry_number: 원본 등록번호

    Returns:
        정규화된 등록번호

    Raises:
        InvalidInputError: 길이가 16자가 아닐 때
    """
    cnr = normalize_registry_number(registry_number or "")
    if len(cnr) != REGISTRY_NUMBER_LENGTH:
        raise InvalidInputError(REGISTRY_NUMBER_FORMAT_MESSAGE, "query")
    return cnr


def parse_case_status(data: Dict[str, Any]) -> CaseStatusRecord:
    """eCourts 응답을 CaseStatusRecord로 변환 (누락 필드는 N/A)"""
    values = {
        target: data.get(source) if data.get(source) is not None else NOT_AVAILABLE
        for source, target in ECOURTS_FIELD_MAPPING.items()
    }
    return CaseStatusRecord(**{k: str(v) for k, v in values.items()})


class CaseStatusService:
    """등록번호 기반 사건 진행 조회 (LookupCache 경유)"""

    def __init__(
        self,
        cache: LookupCache,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Any = requests
    ):
        """
        Args:
            cache: 조회 캐시
            api_url: eCourts API 주소
            timeout: 요청 타임아웃 (초)
            http: requests 호환 객체 (requests 모듈 또는 requests.Session)
        """
        self.cache = cache
        self.api_url = api_url or settings.ecourts_api_url
        self.timeout = timeout or settings.ecourts_timeout_seconds
        self.http = http

    def _fetch(self, cnr: str) -> CaseStatusRecord:
        """
        외부 API 호출

        Raises:
            CaseStatusNotFoundError: 결과 없음
            CaseStatusLookupError: 네트워크/HTTP/응답 파싱 오류
        """
        try:
            response = self.http.post(self.api_url, json={"cnr": cnr}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"eCourts 요청 실패: cnr={cnr} - {str(e)}")
            raise CaseStatusLookupError(str(e)) from e

        if response.status_code == 404:
            raise CaseStatusNotFoundError(cnr)
        if not response.ok:
            logger.error(f"eCourts 응답 오류: cnr={cnr}, status={response.status_code}")
            raise CaseStatusLookupError(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"eCourts 응답 파싱 실패: cnr={cnr} - {str(e)}")
            raise CaseStatusLookupError("응답 본문을 해석할 수 없습니다.") from e

        if not data or not isinstance(data, dict) or data.get("error"):
            raise CaseStatusNotFoundError(cnr)

        return parse_case_status(data)

    def lookup(self, registry_number: str) -> CaseStatusResult:
        """
        사건 진행 조회

        Args:
            registry_number: 16자 등록번호 (대소문자 무관)

        Returns:
            출처(cache/live)가 표시된 결과
        """
        cnr = validate_registry_number(registry_number)

        entry = self.cache.get(cnr)
        if entry is not None:
            return CaseStatusResult(result=entry.result, source=LookupSource.CACHE)

        record = self._fetch(cnr)
        self.cache.put(cnr, record)
        logger.info(f"사건 진행 조회 완료: cnr={cnr}")
        return CaseStatusResult(result=record, source=LookupSource.LIVE)


# 전역 조회 캐시/서비스 인스턴스 (캐시는 프로세스 수명 동안 유지)
lookup_cache = LookupCache(ttl_seconds=settings.lookup_cache_ttl_seconds)
case_status_service = CaseStatusService(lookup_cache)
