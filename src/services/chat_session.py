"""
사건별 채팅 세션 모듈

상태: IDLE -> GREETING -> AWAITING_INPUT <-> IN_FLIGHT
세션당 진행 중인 생성 요청은 항상 최대 한 개다.
"""
from typing import List, Optional, Callable, Iterable
from src.rag.context_assembler import ContextAssembler
from src.rag.retriever import RelevanceRetriever
from src.services.generation_client import GenerationClient
from src.types import Case, ChatMessage, GenerationOk, GenerationFailed, GenerationResult
from src.utils.constants import ChatState, SenderType, GREETING_TEMPLATE, GENERATION_FALLBACK_MESSAGE
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ChatSession:
    """활성 사건 하나에 대한 대화 기록과 요청 흐름 관리"""

    def __init__(
        self,
        corpus: Callable[[], Iterable[Case]],
        generation_client: GenerationClient,
        retriever: Optional[RelevanceRetriever] = None,
        assembler: Optional[ContextAssembler] = None
    ):
        """
        Args:
            corpus: 검색 대상 사건 목록을 돌려주는 함수 (보통 CaseRepository.all)
            generation_client: 생성 서비스 클라이언트
            retriever: 교차 사건 검색기
            assembler: 컨텍스트 조립기
        """
        self.corpus = corpus
        self.generation_client = generation_client
        self.retriever = retriever or RelevanceRetriever()
        self.assembler = assembler or ContextAssembler()
        self.state = ChatState.IDLE
        self.active_case: Optional[Case] = None
        self._transcript: List[ChatMessage] = []
        # 활성 사건이 바뀔 때마다 증가, 응답 도착 시 비교하여 오래된 응답을 버림
        self._generation_id = 0

    @property
    def transcript(self) -> List[ChatMessage]:
        """대화 기록 사본"""
        return list(self._transcript)

    @property
    def in_flight(self) -> bool:
        return self.state == ChatState.IN_FLIGHT

    def activate_case(self, case: Case) -> List[ChatMessage]:
        """
        사건 활성화 (대화 기록을 인사 메시지 하나로 교체)

        진행 중인 요청이 있으면 그 응답은 도착해도 버려진다.

        Args:
            case: 활성화할 사건

        Returns:
            새 대화 기록
        """
        self._generation_id += 1
        self.active_case = case
        self._transcript = [
            ChatMessage(
                sender=SenderType.AI,
                text=GREETING_TEMPLATE.format(case_name=case.summary.case_name)
            )
        ]
        self.state = ChatState.GREETING
        logger.info(f"채팅 사건 활성화: case={case.id}")
        return self.transcript

    def deactivate(self) -> None:
        """활성 사건 해제 (대화 기록 삭제)"""
        self._generation_id += 1
        self.active_case = None
        self._transcript = []
        self.state = ChatState.IDLE

    async def ask(self, question: str) -> bool:
        """
        질문 처리

        빈 질문, 진행 중인 요청, 활성 사건 없음인 경우 무시한다.
        생성 실패는 예외 대신 고정 사과 메시지로 대화 기록에 남긴다.

        Args:
            question: 사용자 질문

        Returns:
            요청 수락 여부
        """
        if not question or not question.strip():
            logger.debug("빈 질문 무시")
            return False
        if self.in_flight:
            logger.debug("진행 중인 요청이 있어 질문 무시")
            return False
        if self.active_case is None:
            logger.debug("활성 사건 없이 질문 무시")
            return False

        case = self.active_case
        generation_id = self._generation_id
        self._transcript.append(ChatMessage(sender=SenderType.USER, text=question))
        self.state = ChatState.IN_FLIGHT

        try:
            result = await self._generate(case, question)
        finally:
            # 취소(CancelledError)되어도 같은 사건이면 입력 대기 상태로 복귀
            if generation_id == self._generation_id:
                self.state = ChatState.AWAITING_INPUT

        if generation_id != self._generation_id:
            logger.info(f"활성 사건이 변경되어 응답 폐기: case={case.id}")
            return True

        if isinstance(result, GenerationOk):
            reply = result.text
        else:
            logger.warning(f"답변 생성 실패, 대체 메시지 사용: case={case.id} - {result.reason}")
            reply = GENERATION_FALLBACK_MESSAGE

        self._transcript.append(ChatMessage(sender=SenderType.AI, text=reply))
        return True

    async def _generate(self, case: Case, question: str) -> GenerationResult:
        """컨텍스트 조립 + 생성 호출 (모든 실패를 GenerationFailed로 변환)"""
        try:
            prompt = self.assembler.assemble(
                primary_document_text=case.document_text,
                primary_summary=case.summary,
                question=question,
                retriever=self.retriever,
                corpus=self.corpus(),
                active_case_id=case.id
            )
            return await self.generation_client.generate(prompt)
        except Exception as e:
            logger.error(f"답변 생성 중 예외: case={case.id} - {str(e)}", exc_info=True)
            return GenerationFailed(reason=str(e))
