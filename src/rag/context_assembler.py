"""
프롬프트 컨텍스트 조립 모듈
"""
import json
from typing import Iterable, Optional
from src.rag.retriever import RelevanceRetriever
from src.types import AssembledPrompt, Case, CaseSummary
from src.utils.constants import (
    SYSTEM_INSTRUCTION,
    PRIMARY_CONTEXT_TEMPLATE,
    PRIMARY_SECTION_TEMPLATE,
    RETRIEVED_SECTION_TEMPLATE,
    QUESTION_TEMPLATE,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ContextAssembler:
    """현재 사건(주 컨텍스트)과 다른 사건 발췌(보조 컨텍스트)를 하나의 요청으로 조립"""

    def __init__(self, system_instruction: str = SYSTEM_INSTRUCTION):
        self.system_instruction = system_instruction

    @staticmethod
    def build_primary_context(document_text: str, summary: CaseSummary) -> str:
        """
        주 컨텍스트 생성 (문서 전문 + 직렬화된 요약)

        Args:
            document_text: 문서 전문
            summary: 구조화된 요약

        Returns:
            주 컨텍스트 문자열
        """
        serialized = json.dumps(
            summary.model_dump(by_alias=True, mode="json", exclude_none=True),
            indent=2,
            ensure_ascii=False
        )
        return PRIMARY_CONTEXT_TEMPLATE.format(document_text=document_text, summary=serialized)

    def build(self, primary_context: str, question: str, retrieved_context: Optional[str] = None) -> AssembledPrompt:
        """
        이미 준비된 컨텍스트로 요청 구성

        Args:
            primary_context: 주 컨텍스트
            question: 사용자 질문
            retrieved_context: 보조 컨텍스트 (비어 있으면 생략)

        Returns:
            AssembledPrompt
        """
        retrieved_context = retrieved_context or ""

        sections = [PRIMARY_SECTION_TEMPLATE.format(primary_context=primary_context)]
        if retrieved_context.strip():
            sections.append(RETRIEVED_SECTION_TEMPLATE.format(retrieved_context=retrieved_context))
        sections.append(QUESTION_TEMPLATE.format(question=question))

        return AssembledPrompt(
            system_instruction=self.system_instruction,
            primary_context=primary_context,
            retrieved_context=retrieved_context,
            question=question,
            prompt="".join(sections)
        )

    def assemble(
        self,
        primary_document_text: str,
        primary_summary: CaseSummary,
        question: str,
        retriever: RelevanceRetriever,
        corpus: Iterable[Case],
        active_case_id: Optional[str]
    ) -> AssembledPrompt:
        """
        질문 하나에 대한 요청 조립 (네트워크 I/O 없음)

        Args:
            primary_document_text: 현재 사건 문서 전문
            primary_summary: 현재 사건 요약
            question: 사용자 질문
            retriever: 교차 사건 검색기
            corpus: 전체 사건 목록
            active_case_id: 검색에서 제외할 현재 사건 ID

        Returns:
            AssembledPrompt
        """
        primary_context = self.build_primary_context(primary_document_text, primary_summary)
        retrieved_context = retriever.retrieve(corpus, active_case_id, question)

        logger.debug(
            f"컨텍스트 조립 완료: 주={len(primary_context)}자, 보조={len(retrieved_context)}자"
        )
        return self.build(primary_context, question, retrieved_context)
