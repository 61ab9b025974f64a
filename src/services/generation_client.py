"""
생성 서비스(OpenAI) 클라이언트 모듈
"""
import asyncio
import json
from typing import List, Dict, Any, Optional, Awaitable, Callable
from openai import AsyncOpenAI
from openai import RateLimitError, APIError, APIConnectionError, APITimeoutError
from config.settings import settings
from src.types import AssembledPrompt, GenerationOk, GenerationFailed, GenerationResult
from src.utils.constants import EMPTY_GENERATION_MESSAGE
from src.utils.exceptions import GenerationServiceError
from src.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


class GenerationClient:
    """OpenAI Chat Completion 래퍼 클래스"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None
    ):
        """
        생성 클라이언트 초기화

        Args:
            api_key: OpenAI API 키 (None이면 설정에서 가져옴)
            model: 사용할 모델명 (None이면 설정에서 가져옴)
            max_retries: 최대 재시도 횟수
            retry_delay: 재시도 간격 (초)
            client: 미리 구성된 AsyncOpenAI 클라이언트 (테스트 주입용)
        """
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        # 최소 1회는 호출
        self.max_retries = max(1, settings.generation_max_retries if max_retries is None else max_retries)
        self.retry_delay = settings.generation_retry_delay if retry_delay is None else retry_delay
        self._client = client
        logger.info(f"생성 클라이언트 초기화 완료: 모델={self.model}")

    @property
    def client(self) -> AsyncOpenAI:
        """AsyncOpenAI 클라이언트 (최초 사용 시 생성)"""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def _retry_with_backoff(self, func: Callable[[], Awaitable[Any]]) -> Any:
        """
        지수 백오프를 사용한 재시도 로직

        Args:
            func: 실행할 코루틴 함수

        Returns:
            함수 실행 결과

        Raises:
            GenerationServiceError: 재시도 불가 오류 또는 재시도 초과
        """
        last_exception = None

        for attempt in range(self.max_retries):
            try:
                return await func()

            except (RateLimitError, APIConnectionError, APITimeoutError) as e:
                wait_time = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"{type(e).__name__} (시도 {attempt + 1}/{self.max_retries}), "
                    f"{wait_time}초 대기 후 재시도..."
                )
                last_exception = e
                await asyncio.sleep(wait_time)

            except APIError as e:
                # 재시도 불가능한 오류
                logger.error(f"생성 API 오류: {str(e)}")
                raise GenerationServiceError(str(e), status_code=getattr(e, 'status_code', None)) from e

        raise GenerationServiceError(
            f"최대 재시도 횟수 초과: {str(last_exception)}",
            status_code=getattr(last_exception, 'status_code', None)
        )

    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> str:
        """
        Chat Completion API 호출

        Args:
            messages: 메시지 리스트
            temperature: 온도 파라미터
            max_tokens: 최대 토큰 수
            **kwargs: 추가 파라미터 (response_format 등)

        Returns:
            응답 본문 (앞뒤 공백 제거)

        Raises:
            GenerationServiceError: 호출 실패 시
        """
        async def _call():
            return await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=settings.generation_temperature if temperature is None else temperature,
                max_tokens=max_tokens or settings.generation_max_tokens,
                **kwargs
            )

        response = await self._retry_with_backoff(_call)

        if not response.choices:
            raise GenerationServiceError("응답에 choices가 없습니다.")

        content = response.choices[0].message.content or ""
        if response.usage is not None:
            logger.debug(f"Chat Completion 성공: 토큰 사용량={response.usage.total_tokens}")
        return content.strip()

    async def complete_json(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        JSON 모드 호출

        Returns:
            파싱된 JSON 객체

        Raises:
            GenerationServiceError: 호출 실패 또는 JSON 파싱 실패 시
        """
        content = await self.chat_completion(
            messages,
            max_tokens=max_tokens,
            response_format={"type": "json_object"}
        )
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"JSON 응답 파싱 실패: {content[:200]}")
            raise GenerationServiceError(f"JSON 파싱 실패: {str(e)}") from e

        if not isinstance(data, dict):
            raise GenerationServiceError("JSON 응답이 객체 형식이 아닙니다.")
        return data

    @log_execution_time()
    async def generate(self, prompt: AssembledPrompt) -> GenerationResult:
        """
        조립된 요청으로 답변 생성 (서비스 오류는 예외 대신 GenerationFailed로 반환)

        Args:
            prompt: ContextAssembler가 만든 요청

        Returns:
            GenerationOk 또는 GenerationFailed
        """
        try:
            text = await self.chat_completion(prompt.to_messages())
        except GenerationServiceError as e:
            logger.error(f"답변 생성 실패: {str(e)}")
            return GenerationFailed(reason=str(e))

        return GenerationOk(text=text or EMPTY_GENERATION_MESSAGE)


# 전역 생성 클라이언트 인스턴스
generation_client = GenerationClient()
