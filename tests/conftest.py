"""
Pytest 설정 및 픽스처
"""
import os

# 설정 로드 전에 테스트용 환경 지정 (인메모리 저장소, 고정 API 키)
os.environ.setdefault("STORAGE_URL", "sqlite://")
os.environ.setdefault("API_SECRET_KEY", "test-secret-key")

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from src.services.case_repository import CaseRepository
from src.services.storage import InMemoryKeyValueStore
from src.types import AssembledPrompt, Case, CaseSummary, GenerationOk, GenerationResult


class FakeClock:
    """호출할 때마다 1초씩 증가하는 시계"""

    def __init__(self, start: Optional[datetime] = None, step_seconds: int = 1):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = timedelta(seconds=step_seconds)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


class FakeGenerationClient:
    """생성 서비스 대역 (gate가 열릴 때까지 응답 대기 가능)"""

    def __init__(self, result: Optional[GenerationResult] = None, gate: Optional[asyncio.Event] = None):
        self.result = result or GenerationOk(text="Generated answer.")
        self.gate = gate
        self.prompts: List[AssembledPrompt] = []

    async def generate(self, prompt: AssembledPrompt) -> GenerationResult:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        return self.result


def build_case(
    case_id: str,
    case_name: str,
    facts: str = "",
    conclusion: str = "",
    owner_id: str = "owner-a",
    created_at: Optional[datetime] = None,
    **summary_fields
) -> Case:
    """테스트용 사건 생성"""
    return Case(
        id=case_id,
        owner_id=owner_id,
        document_name=f"{case_id}.pdf",
        document_text=f"Full text of {case_name}",
        summary=CaseSummary(case_name=case_name, facts_of_case=facts, conclusion=conclusion, **summary_fields),
        created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc)
    )


@pytest.fixture
def make_case():
    """사건 팩토리 픽스처"""
    return build_case


@pytest.fixture
def sample_summary():
    """샘플 요약 픽스처"""
    return CaseSummary(
        case_name="Acme Traders vs Zenith Logistics",
        facts_of_case="The supplier failed to deliver goods under the contract and the buyer claimed damages.",
        conclusion="The court awarded damages for breach of contract.",
        jurisdiction="Bombay High Court",
    )


@pytest.fixture
def store():
    """인메모리 key-value 저장소 픽스처"""
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(store, clock):
    """owner-a로 로드된 사건 저장소 픽스처"""
    repo = CaseRepository(store, namespace="lex-ai-cases", clock=clock)
    repo.load_for_owner("owner-a")
    return repo


@pytest.fixture
def fake_generation_client():
    return FakeGenerationClient()


@pytest.fixture
def fake_client_factory():
    """생성 서비스 대역 팩토리 픽스처"""
    return FakeGenerationClient
