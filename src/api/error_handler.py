"""
API 에러 핸들러 모듈
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from src.utils.exceptions import (
    InvalidInputError,
    CaseNotFoundError,
    GenerationServiceError,
    StorageError,
)
from src.utils.response import error_response
from src.utils.logger import get_logger

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 검증 에러 핸들러"""
    errors = exc.errors()
    error_details = {
        "field": errors[0].get("loc")[-1] if errors else None,
        "message": errors[0].get("msg") if errors else "검증 오류"
    }

    return JSONResponse(
        status_code=422,
        content=error_response(
            code="VALIDATION_ERROR",
            message="요청 데이터 검증 실패",
            details=error_details
        )
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """잘못된 입력 에러 핸들러"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(
            code="INVALID_INPUT",
            message=exc.message,
            details={"field": exc.field} if exc.field else None
        )
    )


async def case_not_found_handler(request: Request, exc: CaseNotFoundError):
    """사건 없음 에러 핸들러"""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response(
            code="CASE_NOT_FOUND",
            message=str(exc),
            details={"case_id": exc.case_id}
        )
    )


async def generation_error_handler(request: Request, exc: GenerationServiceError):
    """생성 서비스 에러 핸들러"""
    logger.error(f"생성 서비스 오류: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_response(
            code="GENERATION_ERROR",
            message="Failed to generate AI summary. The model may have been unable to process the document text.",
            details={"status_code": exc.status_code} if exc.status_code else None
        )
    )


async def storage_error_handler(request: Request, exc: StorageError):
    """저장소 에러 핸들러"""
    logger.error(f"저장소 오류: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="STORAGE_ERROR",
            message="사건 저장 중 오류가 발생했습니다."
        )
    )


async def general_exception_handler(request: Request, exc: Exception):
    """일반 예외 핸들러"""
    logger.error(f"예상치 못한 오류: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="INTERNAL_SERVER_ERROR",
            message="서버 내부 오류가 발생했습니다."
        )
    )
