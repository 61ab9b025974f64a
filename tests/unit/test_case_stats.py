"""
대시보드 통계 단위 테스트
"""
import pytest
from src.services.case_stats import dashboard_stats
from src.types import SentimentAnalysis


@pytest.mark.unit
def test_empty_corpus():
    assert dashboard_stats([]) == {
        "total_cases": 0,
        "jurisdiction_count": 0,
        "by_jurisdiction": {},
        "by_tone": {},
    }


@pytest.mark.unit
def test_cases_grouped_by_jurisdiction_and_tone(make_case):
    cases = [
        make_case("case-1", "A", jurisdiction="Bombay High Court",
                  sentiment_analysis=SentimentAnalysis(overall_tone="Positive", score=0.7)),
        make_case("case-2", "B", jurisdiction="Bombay High Court"),
        make_case("case-3", "C", jurisdiction="Supreme Court of India",
                  sentiment_analysis=SentimentAnalysis(overall_tone="Negative", score=-0.4)),
        make_case("case-4", "D"),
    ]

    stats = dashboard_stats(cases)

    assert stats["total_cases"] == 4
    assert stats["jurisdiction_count"] == 3
    assert stats["by_jurisdiction"] == {"Bombay High Court": 2, "Supreme Court of India": 1, "Unknown": 1}
    assert stats["by_tone"] == {"Positive": 1, "Neutral": 2, "Negative": 1}
