"""
소유자 세션 관리 서비스 모듈

소유자(로그인 사용자)마다 전용 CaseRepository와 ChatSession을 하나씩 둔다.
소유자 전환은 새 세션 생성(저장소 재로드)으로 처리되어 소유자 간 데이터가 섞이지 않는다.
"""
from dataclasses import dataclass
from typing import Dict, Optional
from src.services.case_repository import CaseRepository
from src.services.chat_session import ChatSession
from src.services.generation_client import GenerationClient, generation_client
from src.services.storage import KeyValueStore
from src.types import Case
from src.utils.exceptions import CaseNotFoundError
from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class OwnerSession:
    """활성 소유자 한 명의 작업 공간"""
    owner_id: str
    repository: CaseRepository
    chat: ChatSession

    def delete_case(self, case_id: str) -> bool:
        """사건 삭제 (채팅 중인 사건이면 채팅도 종료)"""
        deleted = self.repository.delete(case_id)
        if deleted and self.chat.active_case is not None and self.chat.active_case.id == case_id:
            self.chat.deactivate()
        return deleted

    def activate_case(self, case_id: str) -> Case:
        """
        채팅 대상 사건 활성화

        Raises:
            CaseNotFoundError: 사건이 없을 때
        """
        case = self.repository.get(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        self.chat.activate_case(case)
        return case


class SessionManager:
    """소유자 세션 관리 클래스"""

    def __init__(self, store: KeyValueStore, client: Optional[GenerationClient] = None):
        """
        Args:
            store: 사건 영속 저장소
            client: 생성 서비스 클라이언트
        """
        self.store = store
        self.client = client or generation_client
        self._sessions: Dict[str, OwnerSession] = {}

    def open_session(self, owner_id: str) -> OwnerSession:
        """
        소유자 세션 생성 (기존 세션은 폐기 후 저장소에서 다시 로드)

        Args:
            owner_id: 소유자 ID

        Returns:
            OwnerSession
        """
        repository = CaseRepository(self.store)
        repository.load_for_owner(owner_id)
        session = OwnerSession(
            owner_id=owner_id,
            repository=repository,
            chat=ChatSession(corpus=repository.all, generation_client=self.client)
        )
        self._sessions[owner_id] = session
        logger.info(f"소유자 세션 생성 완료: owner={owner_id}")
        return session

    def get_session(self, owner_id: str) -> OwnerSession:
        """
        소유자 세션 조회 (없으면 생성)

        Args:
            owner_id: 소유자 ID

        Returns:
            OwnerSession
        """
        session = self._sessions.get(owner_id)
        if session is None:
            session = self.open_session(owner_id)
        return session

    def close_session(self, owner_id: str) -> bool:
        """
        소유자 세션 종료 (로그아웃)

        Returns:
            종료 여부
        """
        session = self._sessions.pop(owner_id, None)
        if session is None:
            return False

        session.chat.deactivate()
        session.repository.unload()
        logger.info(f"소유자 세션 종료: owner={owner_id}")
        return True
