"""
문서 요약 생성 모듈
"""
from pydantic import ValidationError
from src.services.generation_client import GenerationClient, generation_client
from src.types import CaseSummary
from src.utils.constants import SummaryType, SUMMARY_SYSTEM_INSTRUCTION, SUMMARY_TYPE_DETAILS
from src.utils.exceptions import GenerationServiceError, InvalidInputError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class Summarizer:
    """문서 전문을 구조화된 CaseSummary로 요약"""

    def __init__(self, client: GenerationClient = None):
        self.client = client or generation_client

    async def summarize(self, document_text: str, summary_type: SummaryType = SummaryType.DETAILED) -> CaseSummary:
        """
        요약 생성

        Args:
            document_text: 문서 전문
            summary_type: 요약 유형

        Returns:
            CaseSummary

        Raises:
            InvalidInputError: 빈 문서
            GenerationServiceError: 생성 실패 또는 스키마 불일치
        """
        if not document_text or not document_text.strip():
            raise InvalidInputError("문서 내용이 비어 있습니다.", "document_text")

        prompt = (
            "Based on the following legal document text, please provide a structured, "
            f"{SUMMARY_TYPE_DETAILS[summary_type]}\n\n---\n\n{document_text}"
        )
        data = await self.client.complete_json(
            [
                {"role": "system", "content": SUMMARY_SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            max_tokens=4096
        )

        try:
            summary = CaseSummary.model_validate(data)
        except ValidationError as e:
            logger.error(f"요약 스키마 검증 실패: {str(e)}")
            raise GenerationServiceError("요약 결과가 스키마와 일치하지 않습니다.") from e

        logger.info(f"요약 생성 완료: {summary.case_name} ({summary_type.value})")
        return summary


# 전역 요약기 인스턴스
summarizer = Summarizer()
