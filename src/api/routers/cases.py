"""
사건 저장소 API 라우터
"""
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from src.api.auth import verify_api_key
from src.api.dependencies import get_owner_session, get_summarizer
from src.services.case_stats import dashboard_stats
from src.services.session_manager import OwnerSession
from src.services.summarizer import Summarizer
from src.types import Case, CaseSummary
from src.utils.constants import SummaryType
from src.utils.exceptions import CaseNotFoundError
from src.utils.response import success_response
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cases", tags=["cases"], dependencies=[Depends(verify_api_key)])


class CaseCreateRequest(BaseModel):
    document_name: str
    document_text: str
    summary: CaseSummary


class SummarizeRequest(BaseModel):
    document_text: str
    document_name: Optional[str] = None
    summary_type: SummaryType = SummaryType.DETAILED
    save: bool = True


def _serialize(case: Case) -> dict:
    return case.model_dump(by_alias=True, mode="json")


@router.get("")
async def list_cases(session: OwnerSession = Depends(get_owner_session)):
    """사건 목록 (최신순)"""
    return success_response([_serialize(c) for c in session.repository.all()])


@router.get("/stats")
async def case_stats(session: OwnerSession = Depends(get_owner_session)):
    """대시보드 통계"""
    return success_response(dashboard_stats(session.repository.all()))


@router.get("/{case_id}")
async def get_case(case_id: str, session: OwnerSession = Depends(get_owner_session)):
    """사건 조회"""
    case = session.repository.get(case_id)
    if case is None:
        raise CaseNotFoundError(case_id)
    return success_response(_serialize(case))


@router.post("")
async def create_case(request: CaseCreateRequest, session: OwnerSession = Depends(get_owner_session)):
    """요약된 문서를 사건으로 저장"""
    case = session.repository.add(
        request.document_name,
        request.document_text,
        request.summary,
        owner_id=session.owner_id
    )
    return success_response(_serialize(case), "사건이 저장되었습니다.")


@router.post("/summarize")
async def summarize_document(
    request: SummarizeRequest,
    session: OwnerSession = Depends(get_owner_session),
    summarizer: Summarizer = Depends(get_summarizer)
):
    """문서 요약 생성 (save=True면 사건으로 저장)"""
    summary = await summarizer.summarize(request.document_text, request.summary_type)

    data = {"summary": summary.model_dump(by_alias=True, mode="json"), "case": None}
    if request.save:
        case = session.repository.add(
            request.document_name or summary.case_name,
            request.document_text,
            summary,
            owner_id=session.owner_id
        )
        data["case"] = _serialize(case)

    return success_response(data)


@router.delete("/{case_id}")
async def delete_case(case_id: str, session: OwnerSession = Depends(get_owner_session)):
    """사건 삭제 (없는 ID는 무시)"""
    deleted = session.delete_case(case_id)
    return success_response({"case_id": case_id, "deleted": deleted})
