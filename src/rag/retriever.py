"""
교차 사건 키워드 검색 모듈

질문 키워드와 다른 저장 사건의 요약(사건명, 사실관계, 결론)이 겹치는 정도로 후보를
점수화하고, 상위 사건의 발췌를 만든다. 벡터 검색을 대신하는 결정적 휴리스틱이며
네트워크나 모델 없이 동작한다.
"""
from typing import Iterable, List, Optional
from config.settings import settings
from src.types import Case, RetrievalCandidate
from src.utils.constants import RETRIEVAL_HEADER, RETRIEVAL_SNIPPET_TEMPLATE
from src.utils.logger import get_logger

logger = get_logger(__name__)


class RelevanceRetriever:
    """키워드 중첩 기반 검색 클래스"""

    def __init__(
        self,
        min_keyword_length: Optional[int] = None,
        min_score: Optional[int] = None,
        max_snippets: Optional[int] = None,
        snippet_chars: Optional[int] = None
    ):
        """
        Args:
            min_keyword_length: 이 길이보다 긴 토큰만 키워드로 사용
            min_score: 이 점수보다 큰 후보만 관련 사건으로 인정
            max_snippets: 발췌할 최대 사건 수
            snippet_chars: 사실관계/결론 발췌 길이 (문자 수)
        """
        self.min_keyword_length = (
            settings.retrieval_min_keyword_length if min_keyword_length is None else min_keyword_length
        )
        self.min_score = settings.retrieval_min_score if min_score is None else min_score
        self.max_snippets = settings.retrieval_max_snippets if max_snippets is None else max_snippets
        self.snippet_chars = settings.retrieval_snippet_chars if snippet_chars is None else snippet_chars

    def extract_keywords(self, question: str) -> List[str]:
        """
        질문에서 키워드 추출 (공백 분리, 소문자, 길이 필터, 중복 제거)

        Args:
            question: 사용자 질문

        Returns:
            등장 순서를 유지한 키워드 목록
        """
        tokens = question.lower().split()
        return list(dict.fromkeys(t for t in tokens if len(t) > self.min_keyword_length))

    @staticmethod
    def searchable_text(case: Case) -> str:
        """사건명, 사실관계, 결론을 이어 붙인 소문자 검색 대상 텍스트"""
        summary = case.summary
        return f"{summary.case_name} {summary.facts_of_case} {summary.conclusion}".lower()

    def score(self, case: Case, keywords: Iterable[str]) -> int:
        """검색 대상 텍스트에 부분 문자열로 포함된 키워드 수"""
        text = self.searchable_text(case)
        return sum(1 for keyword in keywords if keyword in text)

    def rank(self, corpus: Iterable[Case], exclude_id: Optional[str], keywords: List[str]) -> List[RetrievalCandidate]:
        """
        후보 점수화 및 정렬

        Args:
            corpus: 전체 사건 목록
            exclude_id: 제외할 활성 사건 ID
            keywords: 질문 키워드

        Returns:
            임계값을 넘은 후보 (점수 내림차순, 동점은 원래 순서)
        """
        candidates = [
            RetrievalCandidate(case=case, score=self.score(case, keywords))
            for case in corpus
            if case.id != exclude_id
        ]
        relevant = [c for c in candidates if c.score > self.min_score]
        return sorted(relevant, key=lambda c: c.score, reverse=True)

    def format_snippet(self, case: Case) -> str:
        """사건 하나의 발췌 텍스트 (단어 경계 무시하고 자름)"""
        summary = case.summary
        return RETRIEVAL_SNIPPET_TEMPLATE.format(
            case_name=summary.case_name,
            facts=summary.facts_of_case[:self.snippet_chars],
            conclusion=summary.conclusion[:self.snippet_chars]
        )

    def retrieve(self, corpus: Iterable[Case], exclude_id: Optional[str], question: str) -> str:
        """
        관련 사건 발췌 검색

        Args:
            corpus: 전체 사건 목록
            exclude_id: 제외할 활성 사건 ID
            question: 사용자 질문

        Returns:
            헤더 + 발췌 텍스트, 관련 사건이 없으면 빈 문자열
        """
        keywords = self.extract_keywords(question)
        if not keywords:
            return ""

        ranked = self.rank(corpus, exclude_id, keywords)
        if not ranked:
            logger.debug(f"관련 사건 없음: 키워드 {len(keywords)}개")
            return ""

        top = ranked[:self.max_snippets]
        logger.debug(
            "관련 사건 검색 완료: "
            + ", ".join(f"{c.case.id}(score={c.score})" for c in top)
        )
        return RETRIEVAL_HEADER + "\n\n".join(self.format_snippet(c.case) for c in top)
