"""
채팅 관련 API 라우터
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from src.api.auth import verify_api_key, get_owner_id
from src.api.dependencies import get_owner_session, get_session_manager
from src.services.chat_session import ChatSession
from src.services.session_manager import OwnerSession, SessionManager
from src.utils.constants import ChatState, PROMPT_SUGGESTIONS
from src.utils.exceptions import InvalidInputError
from src.utils.response import success_response
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"], dependencies=[Depends(verify_api_key)])


class ChatActivateRequest(BaseModel):
    case_id: str


class ChatMessageRequest(BaseModel):
    question: str


def _chat_payload(chat: ChatSession) -> dict:
    return {
        "state": chat.state.value,
        "active_case_id": chat.active_case.id if chat.active_case else None,
        "transcript": [m.model_dump(mode="json") for m in chat.transcript],
    }


@router.post("/activate")
async def activate_case(request: ChatActivateRequest, session: OwnerSession = Depends(get_owner_session)):
    """채팅 대상 사건 활성화"""
    session.activate_case(request.case_id)
    payload = _chat_payload(session.chat)
    payload["suggestions"] = PROMPT_SUGGESTIONS
    return success_response(payload)


@router.post("/message")
async def send_message(request: ChatMessageRequest, session: OwnerSession = Depends(get_owner_session)):
    """사용자 질문 처리"""
    if not request.question.strip():
        raise InvalidInputError("질문이 비어 있습니다.", "question")
    if session.chat.state == ChatState.IDLE:
        raise InvalidInputError("먼저 채팅할 사건을 선택하세요.", "case_id")

    accepted = await session.chat.ask(request.question)

    payload = _chat_payload(session.chat)
    payload["accepted"] = accepted
    return success_response(payload)


@router.get("/transcript")
async def get_transcript(session: OwnerSession = Depends(get_owner_session)):
    """현재 대화 기록"""
    return success_response(_chat_payload(session.chat))


@router.post("/session/reload")
async def reload_session(
    owner_id: str = Depends(get_owner_id),
    manager: SessionManager = Depends(get_session_manager)
):
    """소유자 세션 재생성 (저장소 재로드, 채팅 초기화)"""
    session = manager.open_session(owner_id)
    return success_response({"owner_id": owner_id, "case_count": len(session.repository)})


@router.post("/session/close")
async def close_session(
    owner_id: str = Depends(get_owner_id),
    manager: SessionManager = Depends(get_session_manager)
):
    """소유자 세션 종료 (로그아웃)"""
    return success_response({"owner_id": owner_id, "closed": manager.close_session(owner_id)})
