"""
사건 대시보드 통계 모듈
"""
from collections import Counter
from typing import Any, Dict, Iterable
from src.types import Case


def dashboard_stats(cases: Iterable[Case]) -> Dict[str, Any]:
    """
    저장된 사건 통계

    Args:
        cases: 사건 목록

    Returns:
        전체 건수, 관할 수, 관할별/어조별 건수
    """
    cases = list(cases)
    jurisdictions = Counter(c.summary.jurisdiction or "Unknown" for c in cases)
    tones = Counter(
        c.summary.sentiment_analysis.overall_tone if c.summary.sentiment_analysis else "Neutral"
        for c in cases
    )
    return {
        "total_cases": len(cases),
        "jurisdiction_count": len(jurisdictions),
        "by_jurisdiction": dict(jurisdictions),
        "by_tone": dict(tones),
    }
