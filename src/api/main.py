"""
FastAPI 애플리케이션 메인 파일
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from config.settings import settings
from src.utils.logger import setup_logging, get_logger
from src.api.middleware import LoggingMiddleware
from src.api.error_handler import (
    validation_exception_handler,
    invalid_input_handler,
    case_not_found_handler,
    generation_error_handler,
    storage_error_handler,
    general_exception_handler
)
from src.utils.exceptions import (
    InvalidInputError,
    CaseNotFoundError,
    GenerationServiceError,
    StorageError
)

# 로깅 초기화
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Lex AI 사건 어시스턴트 API",
    description="저장된 사건 요약 기반 교차 사건 검색 + 채팅 어시스턴트",
    version="0.1.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 로깅 미들웨어
app.add_middleware(LoggingMiddleware)

# 에러 핸들러 등록
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(InvalidInputError, invalid_input_handler)
app.add_exception_handler(CaseNotFoundError, case_not_found_handler)
app.add_exception_handler(GenerationServiceError, generation_error_handler)
app.add_exception_handler(StorageError, storage_error_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.on_event("startup")
async def startup_event():
    """애플리케이션 시작 시 실행"""
    logger.info(f"애플리케이션 시작: 환경={settings.environment}, 모델={settings.openai_model}")


@app.on_event("shutdown")
async def shutdown_event():
    """애플리케이션 종료 시 실행"""
    logger.info("애플리케이션 종료")

    from src.db.connection import db_manager
    db_manager.close()


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "Lex AI 사건 어시스턴트 API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    from src.db.connection import db_manager

    db_healthy = db_manager.health_check()
    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "storage": "healthy" if db_healthy else "unhealthy"
    }


# 라우터 등록
from src.api.routers import cases, chat, generate, legal_search  # noqa: E402
app.include_router(cases.router)
app.include_router(chat.router)
app.include_router(generate.router)
app.include_router(legal_search.router)
