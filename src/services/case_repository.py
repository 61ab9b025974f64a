"""
사건 저장소 모듈

활성 소유자 한 명의 사건 목록을 메모리에 보관하고, 변경될 때마다 소유자별 키로
전체 목록을 다시 저장한다. 소유자 전환은 항상 "버리고 다시 로드"로 처리한다.
"""
import itertools
import json
import secrets
import threading
from datetime import datetime
from typing import Callable, List, Optional
from pydantic import TypeAdapter
from config.settings import settings
from src.services.storage import KeyValueStore, build_storage_key
from src.types import Case, CaseSummary
from src.utils.helpers import utc_now
from src.utils.logger import get_logger

logger = get_logger(__name__)

_case_list_adapter = TypeAdapter(List[Case])


class CaseIdGenerator:
    """단조 증가 카운터 + 랜덤 접미사 기반 사건 ID 생성기"""

    def __init__(self, prefix: str = "case", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            sequence = next(self._counter)
        return f"{self.prefix}-{sequence}-{secrets.token_hex(4)}"


class CaseRepository:
    """소유자 단위 사건 저장소"""

    def __init__(
        self,
        store: KeyValueStore,
        namespace: Optional[str] = None,
        id_generator: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        사건 저장소 초기화

        Args:
            store: 영속 key-value 저장소
            namespace: 저장 키 네임스페이스 (None이면 설정값)
            id_generator: 사건 ID 생성기 (None이면 CaseIdGenerator)
            clock: 현재 시각 함수 (테스트 주입용)
        """
        self.store = store
        self.namespace = namespace or settings.storage_namespace
        self.id_generator = id_generator or CaseIdGenerator()
        self.clock = clock or utc_now
        self._owner_id: Optional[str] = None
        self._cases: List[Case] = []

    @property
    def owner_id(self) -> Optional[str]:
        """현재 활성 소유자 ID"""
        return self._owner_id

    def _storage_key(self) -> str:
        return build_storage_key(self.namespace, self._owner_id)

    def load_for_owner(self, owner_id: str) -> List[Case]:
        """
        소유자의 사건 목록을 로드하여 메모리 상태를 교체

        저장된 데이터가 없거나 파싱에 실패하면 빈 목록으로 복구한다.

        Args:
            owner_id: 소유자 ID

        Returns:
            로드된 사건 목록 (최신순)
        """
        # 읽기 실패(StorageError)는 전파되며 기존 상태는 그대로 유지
        payload = self.store.read(build_storage_key(self.namespace, owner_id))
        self._owner_id = owner_id
        self._cases = []

        if payload is None:
            logger.info(f"저장된 사건 없음: owner={owner_id}")
            return self.all()

        try:
            self._cases = _case_list_adapter.validate_python(json.loads(payload))
        except ValueError as e:
            logger.error(f"저장된 사건 파싱 실패, 빈 목록으로 복구: owner={owner_id} - {str(e)}")
            self._cases = []

        logger.info(f"사건 로드 완료: owner={owner_id}, {len(self._cases)}건")
        return self.all()

    def unload(self) -> None:
        """활성 소유자 해제 (로그아웃)"""
        logger.info(f"사건 저장소 해제: owner={self._owner_id}")
        self._owner_id = None
        self._cases = []

    def _persist(self, cases: List[Case]) -> None:
        """
        활성 소유자의 사건 목록 전체 저장

        저장에 성공한 뒤에 메모리 상태를 교체한다. StorageError는 그대로 전파된다.
        """
        payload = json.dumps(
            [case.model_dump(by_alias=True, mode="json") for case in cases],
            ensure_ascii=False
        )
        self.store.write(self._storage_key(), payload)
        self._cases = cases

    def add(
        self,
        document_name: str,
        document_text: str,
        summary: CaseSummary,
        owner_id: Optional[str] = None
    ) -> Optional[Case]:
        """
        사건 추가 (최신순 목록 맨 앞)

        Args:
            document_name: 원본 문서 파일명
            document_text: 문서 전문
            summary: 구조화된 요약
            owner_id: 소유자 ID (생략 시 활성 소유자)

        Returns:
            생성된 Case, 활성 소유자가 없으면 None
        """
        if self._owner_id is None:
            logger.warning("활성 소유자 없이 사건 추가 시도")
            return None

        if owner_id is not None and owner_id != self._owner_id:
            logger.warning(f"활성 소유자와 다른 소유자로 사건 추가 시도: {owner_id} != {self._owner_id}")
            return None

        case = Case(
            id=self.id_generator(),
            owner_id=self._owner_id,
            document_name=document_name,
            document_text=document_text,
            summary=summary,
            created_at=self.clock()
        )
        self._persist([case] + self._cases)

        logger.info(f"사건 추가 완료: id={case.id}, owner={self._owner_id}")
        return case

    def delete(self, case_id: str) -> bool:
        """
        사건 삭제 (없으면 아무 것도 하지 않음)

        Args:
            case_id: 사건 ID

        Returns:
            삭제 여부
        """
        remaining = [case for case in self._cases if case.id != case_id]
        if len(remaining) == len(self._cases):
            logger.debug(f"삭제할 사건 없음: id={case_id}")
            return False

        self._persist(remaining)
        logger.info(f"사건 삭제 완료: id={case_id}, owner={self._owner_id}")
        return True

    def get(self, case_id: str) -> Optional[Case]:
        """ID로 사건 조회"""
        return next((case for case in self._cases if case.id == case_id), None)

    def all(self) -> List[Case]:
        """
        사건 목록 (created_at 최신순, 같은 시각이면 삽입 순서 유지)

        Returns:
            사건 목록 사본
        """
        return sorted(self._cases, key=lambda case: case.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._cases)
