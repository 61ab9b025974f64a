"""
판례 키워드 검색 서비스 모듈
YAML 카탈로그에서 판례 목록을 로드하고 모든 검색어가 포함된 항목을 반환
"""
import yaml
from yaml import YAMLError
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError
from config.settings import settings
from src.types import CaseLawEntry
from src.utils.constants import EMPTY_QUERY_MESSAGE
from src.utils.exceptions import InvalidInputError, CaseLawSearchError
from src.utils.logger import get_logger

logger = get_logger(__name__)

# config 디렉토리의 기본 카탈로그
DEFAULT_CATALOGUE_PATH = Path(__file__).parent.parent.parent / "config" / "case_law.yaml"


class CaseLawSearchService:
    """판례 검색 클래스 (캐시 없음)"""

    def __init__(self, catalogue_path: Optional[Path] = None, entries: Optional[List[CaseLawEntry]] = None):
        """
        Args:
            catalogue_path: 판례 카탈로그 YAML 경로
            entries: 직접 주입할 판례 목록 (지정 시 파일을 읽지 않음)
        """
        if catalogue_path is None:
            catalogue_path = settings.case_law_catalogue_path or DEFAULT_CATALOGUE_PATH
        self.catalogue_path = Path(catalogue_path)
        self._entries = entries

    @property
    def entries(self) -> List[CaseLawEntry]:
        """판례 목록 (최초 접근 시 로드)"""
        if self._entries is None:
            self._entries = self._load_catalogue()
        return self._entries

    def _load_catalogue(self) -> List[CaseLawEntry]:
        """
        카탈로그 YAML 로드

        Raises:
            CaseLawSearchError: 파일 형식 오류 시
        """
        if not self.catalogue_path.exists():
            logger.warning(f"판례 카탈로그 파일이 없습니다: {self.catalogue_path}")
            return []

        try:
            with open(self.catalogue_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            entries = [CaseLawEntry.model_validate(item) for item in data.get("case_law", [])]
        except (YAMLError, ValidationError, AttributeError) as e:
            logger.error(f"판례 카탈로그 로드 실패: {str(e)}")
            raise CaseLawSearchError(str(e)) from e

        logger.info(f"판례 카탈로그 로드 완료: {len(entries)}건")
        return entries

    def search(self, query: str) -> List[CaseLawEntry]:
        """
        판례 검색

        Args:
            query: 자유 텍스트 검색어

        Returns:
            모든 검색어를 포함하는 판례 (카탈로그 순서)

        Raises:
            InvalidInputError: 빈 검색어
        """
        if not query or not query.strip():
            raise InvalidInputError(EMPTY_QUERY_MESSAGE, "query")

        terms = query.lower().split()
        results = [
            entry for entry in self.entries
            if all(term in f"{entry.case_name} {entry.summary} {entry.issue}".lower() for term in terms)
        ]
        logger.debug(f"판례 검색 완료: query={query!r}, {len(results)}건")
        return results


# 전역 판례 검색 인스턴스
case_law_search_service = CaseLawSearchService()
