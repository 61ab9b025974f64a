"""
FastAPI 의존성 주입 모듈
"""
from functools import lru_cache
from fastapi import Depends
from src.api.auth import get_owner_id
from src.db.connection import db_manager
from src.services.case_law_search import CaseLawSearchService, case_law_search_service
from src.services.case_status_service import CaseStatusService, case_status_service
from src.services.generation_client import GenerationClient, generation_client
from src.services.session_manager import SessionManager, OwnerSession
from src.services.storage import SqlKeyValueStore
from src.services.summarizer import Summarizer, summarizer


@lru_cache(maxsize=1)
def get_session_manager() -> SessionManager:
    """프로세스 단위 소유자 세션 관리자"""
    return SessionManager(SqlKeyValueStore(db_manager), generation_client)


def get_owner_session(
    owner_id: str = Depends(get_owner_id),
    manager: SessionManager = Depends(get_session_manager)
) -> OwnerSession:
    """요청 소유자의 세션"""
    return manager.get_session(owner_id)


def get_generation_client() -> GenerationClient:
    return generation_client


def get_summarizer() -> Summarizer:
    return summarizer


def get_case_status_service() -> CaseStatusService:
    return case_status_service


def get_case_law_search_service() -> CaseLawSearchService:
    return case_law_search_service
