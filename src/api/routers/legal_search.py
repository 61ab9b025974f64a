"""
법률 검색 API 라우터

- kanoon: 판례 키워드 검색 -> {results}
- ecourts: 사건 진행 조회 (캐시 경유) -> {result, source}
오류는 {error} 본문과 400/404/500 상태 코드로 반환한다.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from src.api.auth import verify_api_key
from src.api.dependencies import get_case_law_search_service, get_case_status_service
from src.services.case_law_search import CaseLawSearchService
from src.services.case_status_service import CaseStatusService
from src.utils.constants import (
    SearchType,
    EMPTY_QUERY_MESSAGE,
    CASE_STATUS_NOT_FOUND_MESSAGE,
    CASE_STATUS_UNAVAILABLE_MESSAGE,
)
from src.utils.exceptions import (
    InvalidInputError,
    CaseStatusNotFoundError,
    CaseStatusLookupError,
    CaseLawSearchError,
)
from src.utils.response import service_error
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["legal-search"], dependencies=[Depends(verify_api_key)])


class LegalSearchRequest(BaseModel):
    type: SearchType
    query: str = ""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=service_error(message))


@router.post("/legal-search")
def legal_search(
    request: LegalSearchRequest,
    case_law: CaseLawSearchService = Depends(get_case_law_search_service),
    case_status: CaseStatusService = Depends(get_case_status_service)
):
    """판례 검색 / 사건 진행 조회"""
    if not request.query.strip():
        return _error(400, EMPTY_QUERY_MESSAGE)

    try:
        if request.type == SearchType.KANOON:
            results = case_law.search(request.query)
            return {"results": [r.model_dump(by_alias=True) for r in results]}

        lookup = case_status.lookup(request.query)
        return {
            "result": lookup.result.model_dump(by_alias=True),
            "source": lookup.source.value
        }

    except InvalidInputError as e:
        return _error(400, e.message)
    except CaseStatusNotFoundError as e:
        logger.info(f"사건 진행 정보 없음: {e.registry_number}")
        return _error(404, CASE_STATUS_NOT_FOUND_MESSAGE)
    except (CaseStatusLookupError, CaseLawSearchError) as e:
        logger.error(f"법률 검색 실패: type={request.type.value} - {str(e)}")
        return _error(500, CASE_STATUS_UNAVAILABLE_MESSAGE)
