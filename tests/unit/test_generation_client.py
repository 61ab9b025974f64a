"""
생성 클라이언트 단위 테스트
"""
import asyncio
from types import SimpleNamespace
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock
from openai import APIConnectionError, BadRequestError, RateLimitError
from src.services.generation_client import GenerationClient
from src.types import AssembledPrompt, GenerationOk, GenerationFailed
from src.utils.constants import EMPTY_GENERATION_MESSAGE
from src.utils.exceptions import GenerationServiceError

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=42)
    )


def _client(create):
    openai_client = MagicMock()
    openai_client.chat.completions.create = create
    return GenerationClient(api_key="test", model="test-model", max_retries=3, retry_delay=0, client=openai_client)


@pytest.fixture
def prompt():
    return AssembledPrompt(
        system_instruction="system",
        primary_context="primary",
        retrieved_context="",
        question="What happened?",
        prompt="PRIMARY DOCUMENT CONTEXT:\n---\nprimary\n\nQUESTION: What happened?"
    )


class TestGenerate:
    """generate 테스트"""

    @pytest.mark.unit
    def test_success_returns_trimmed_text(self, prompt):
        create = AsyncMock(return_value=_completion("  The goods were not delivered.  "))
        client = _client(create)

        result = asyncio.run(client.generate(prompt))

        assert result == GenerationOk(text="The goods were not delivered.")
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}
        assert kwargs["messages"][1]["content"] == prompt.prompt

    @pytest.mark.unit
    def test_empty_reply_becomes_placeholder(self, prompt):
        client = _client(AsyncMock(return_value=_completion(None)))
        assert asyncio.run(client.generate(prompt)) == GenerationOk(text=EMPTY_GENERATION_MESSAGE)

    @pytest.mark.unit
    def test_non_retryable_error_is_failed_result(self, prompt):
        error = BadRequestError("bad request", response=httpx.Response(400, request=REQUEST), body=None)
        create = AsyncMock(side_effect=error)
        client = _client(create)

        result = asyncio.run(client.generate(prompt))

        assert isinstance(result, GenerationFailed)
        assert create.await_count == 1

    @pytest.mark.unit
    def test_transient_errors_are_retried(self, prompt):
        create = AsyncMock(side_effect=[
            APIConnectionError(request=REQUEST),
            RateLimitError("slow down", response=httpx.Response(429, request=REQUEST), body=None),
            _completion("Recovered."),
        ])
        client = _client(create)

        assert asyncio.run(client.generate(prompt)) == GenerationOk(text="Recovered.")
        assert create.await_count == 3

    @pytest.mark.unit
    def test_retries_exhausted_is_failed_result(self, prompt):
        create = AsyncMock(side_effect=APIConnectionError(request=REQUEST))
        client = _client(create)

        result = asyncio.run(client.generate(prompt))

        assert isinstance(result, GenerationFailed)
        assert create.await_count == 3

    @pytest.mark.unit
    def test_missing_choices_is_failed_result(self, prompt):
        client = _client(AsyncMock(return_value=SimpleNamespace(choices=[], usage=None)))
        assert isinstance(asyncio.run(client.generate(prompt)), GenerationFailed)


class TestCompleteJson:
    """JSON 모드 테스트"""

    @pytest.mark.unit
    def test_json_object_is_parsed(self):
        create = AsyncMock(return_value=_completion('{"caseName": "A vs B"}'))
        client = _client(create)

        data = asyncio.run(client.complete_json([{"role": "user", "content": "x"}], max_tokens=100))

        assert data == {"caseName": "A vs B"}
        assert create.call_args.kwargs["response_format"] == {"type": "json_object"}
        assert create.call_args.kwargs["max_tokens"] == 100

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["not json", "[1, 2]"])
    def test_invalid_json_raises(self, content):
        client = _client(AsyncMock(return_value=_completion(content)))
        with pytest.raises(GenerationServiceError):
            asyncio.run(client.complete_json([{"role": "user", "content": "x"}]))


@pytest.mark.unit
def test_zero_retries_still_calls_once(prompt):
    create = AsyncMock(return_value=_completion("Answer."))
    openai_client = MagicMock()
    openai_client.chat.completions.create = create
    client = GenerationClient(api_key="test", model="test-model", max_retries=0, retry_delay=0, client=openai_client)

    assert asyncio.run(client.generate(prompt)) == GenerationOk(text="Answer.")
    assert create.await_count == 1
