"""
상수 정의 모듈
하드코딩된 값들을 한 곳에 모아 관리
"""
from enum import Enum
from typing import Dict


# ============================================================================
# 채팅 관련 Enum
# ============================================================================

class SenderType(str, Enum):
    """대화 발화자"""
    USER = "user"
    AI = "ai"


class ChatState(str, Enum):
    """사건별 채팅 세션 상태"""
    IDLE = "IDLE"
    GREETING = "GREETING"
    AWAITING_INPUT = "AWAITING_INPUT"
    IN_FLIGHT = "IN_FLIGHT"


class LookupSource(str, Enum):
    """사건 진행 조회 결과 출처"""
    CACHE = "cache"
    LIVE = "live"


class SearchType(str, Enum):
    """법률 검색 유형"""
    KANOON = "kanoon"
    ECOURTS = "ecourts"


class SummaryType(str, Enum):
    """문서 요약 유형"""
    CONCISE = "Concise"
    DETAILED = "Detailed"
    EXECUTIVE = "Executive"
    JOURNAL_DIGEST = "Journal Digest"


# ============================================================================
# 채팅 메시지
# ============================================================================

GREETING_TEMPLATE = (
    "I have loaded the context for **{case_name}**. What would you like to know? "
    "I can also draw connections from your other saved cases."
)

GENERATION_FALLBACK_MESSAGE = "Sorry, I encountered an error trying to respond. Please try again."

EMPTY_GENERATION_MESSAGE = "The model returned an empty response."

PROMPT_SUGGESTIONS = [
    "What was the main reason for the court's decision?",
    "Explain the term 'ratio decidendi' in the context of this case.",
    "Who were the key witnesses mentioned?",
]


# ============================================================================
# 프롬프트 구성
# ============================================================================

SYSTEM_INSTRUCTION = (
    "You are a helpful legal AI assistant. Your role is to answer questions based on the "
    "provided context. First, use the 'Primary Document Context'. If it's insufficient, use "
    "the 'Additional Retrieved Context' from other documents to provide a more comprehensive "
    "answer. If the answer cannot be found in any of the provided text, state that clearly. "
    "Be concise and direct."
)

PRIMARY_CONTEXT_TEMPLATE = "DOCUMENT TEXT:\n{document_text}\n\nSUMMARY:\n{summary}"

PRIMARY_SECTION_TEMPLATE = "PRIMARY DOCUMENT CONTEXT:\n---\n{primary_context}\n---\n\n"

RETRIEVED_SECTION_TEMPLATE = "ADDITIONAL RETRIEVED CONTEXT FROM OTHER CASES:\n---\n{retrieved_context}\n---\n\n"

QUESTION_TEMPLATE = (
    "Based on all the context provided, please answer the following question.\n"
    "QUESTION: {question}"
)

RETRIEVAL_HEADER = "ADDITIONAL CONTEXT FROM OTHER RELEVANT CASES:\n"

RETRIEVAL_SNIPPET_TEMPLATE = 'From case "{case_name}":\n...{facts}...\n...{conclusion}...'

SUMMARY_SYSTEM_INSTRUCTION = (
    "You are an expert legal assistant AI. Your task is to extract key information from the "
    "provided text and structure it into a JSON format. You must return ONLY a valid JSON "
    "object. Do not include markdown, comments, or any text outside the JSON object. Use the "
    "keys caseName, citation, jurisdiction, parties, factsOfCase, legalIssues, "
    "judgmentAndReasoning, conclusion, caseCategory and sentimentAnalysis "
    "({overallTone, score}) and fill every field with accurate information from the text."
)

SUMMARY_TYPE_DETAILS: Dict[SummaryType, str] = {
    SummaryType.CONCISE: "a brief, high-level summary suitable for a quick overview.",
    SummaryType.DETAILED: "a comprehensive, in-depth summary covering all aspects of the case.",
    SummaryType.EXECUTIVE: "a summary focused on the business implications and key outcomes for stakeholders.",
    SummaryType.JOURNAL_DIGEST: (
        "a condensed digest summary suitable for publication in a law journal, "
        "focusing on the core legal reasoning and outcome."
    ),
}


# ============================================================================
# 사건 진행 조회 (eCourts)
# ============================================================================

REGISTRY_NUMBER_LENGTH = 16

REGISTRY_NUMBER_FORMAT_MESSAGE = "CNR must be exactly 16 characters (e.g., MHMC070004752022)."

CASE_STATUS_NOT_FOUND_MESSAGE = (
    "No case found. If this CNR belongs to a High Court, we need to enable High Court mode."
)

CASE_STATUS_UNAVAILABLE_MESSAGE = "Court servers are busy. Try again in a moment."

EMPTY_QUERY_MESSAGE = "Query cannot be empty."

# eCourts 응답 필드 -> CaseStatusRecord 필드
ECOURTS_FIELD_MAPPING: Dict[str, str] = {
    "case_type": "case_type",
    "case_status": "case_status",
    "first_hearing_date": "first_hearing",
    "next_hearing_date": "next_hearing",
    "court_no": "court_number",
    "judge_name": "judge",
}

NOT_AVAILABLE = "N/A"
