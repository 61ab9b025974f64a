"""
공통 타입 정의
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from src.utils.constants import SenderType, LookupSource


class CamelModel(BaseModel):
    """camelCase 직렬화(저장/외부 계약)와 snake_case 접근을 함께 지원하는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentAnalysis(CamelModel):
    """판결 어조 분석"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    overall_tone: str = "Neutral"
    score: float = 0.0


class CaseSummary(CamelModel):
    """
    구조화된 사건 요약

    검색 로직은 case_name, facts_of_case, conclusion 세 필드만 사용한다.
    나머지 요약 필드는 그대로 보존된다.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True)

    case_name: str
    facts_of_case: str = ""
    conclusion: str = ""
    citation: str = ""
    jurisdiction: str = ""
    parties: List[str] = Field(default_factory=list)
    legal_issues: List[str] = Field(default_factory=list)
    judgment_and_reasoning: str = ""
    case_category: Optional[str] = None
    sentiment_analysis: Optional[SentimentAnalysis] = None


class Case(CamelModel):
    """사용자가 저장한 요약 문서 (생성 후 불변)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    owner_id: str
    document_name: str
    document_text: str
    summary: CaseSummary
    created_at: datetime


class ChatMessage(CamelModel):
    """대화 한 턴"""
    sender: SenderType
    text: str


@dataclass(frozen=True)
class RetrievalCandidate:
    """검색 후보 (저장되지 않음)"""
    case: Case
    score: int


@dataclass(frozen=True)
class AssembledPrompt:
    """
    생성 서비스로 전달되는 단일 요청 단위

    Attributes:
        system_instruction: 답변 우선순위를 설명하는 고정 시스템 지시문
        primary_context: 현재 사건의 전문 + 요약
        retrieved_context: 다른 사건 발췌 (없으면 빈 문자열)
        question: 사용자 질문 원문
        prompt: 위 항목을 모두 포함한 사용자 프롬프트
    """
    system_instruction: str
    primary_context: str
    retrieved_context: str
    question: str
    prompt: str

    def to_messages(self) -> List[dict]:
        """Chat Completion 메시지 형식으로 변환"""
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.prompt},
        ]


@dataclass(frozen=True)
class GenerationOk:
    """생성 성공"""
    text: str


@dataclass(frozen=True)
class GenerationFailed:
    """생성 실패 (사유만 보관, 예외는 전파하지 않음)"""
    reason: str


GenerationResult = Union[GenerationOk, GenerationFailed]


class CaseStatusRecord(CamelModel):
    """eCourts 사건 진행 정보"""
    case_type: str
    case_status: str
    first_hearing: str
    next_hearing: str
    court_number: str
    judge: str


class CaseStatusResult(CamelModel):
    """출처가 표시된 사건 진행 조회 결과"""
    result: CaseStatusRecord
    source: LookupSource


class CaseLawEntry(CamelModel):
    """판례 검색 결과 항목"""
    case_name: str
    court: str
    date: str
    issue: str
    summary: str
