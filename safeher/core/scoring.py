"""
Safety score evaluation functions for SafeHer.

This module contains pure functions for scoring a location
from the time of day and the number of nearby help resources.
"""

from datetime import datetime
from typing import List
from .models import SafetyAssessment, SafetyStatus, ScoreFactor

BASE_SCORE = 100

# 상태 등급 경계 (낮음 -> 높음, 첫 일치 우선)
STATUS_THRESHOLDS = [
    (40, "High Risk"),
    (60, "Moderate Risk"),
    (80, "Caution"),
]

FINAL_RECOMMENDATION = "Trust your instincts - if something feels wrong, leave"

def time_factors(hour: int) -> List[ScoreFactor]:
    """
    시간대 요인을 계산합니다.

    Args:
        hour: 현지 시각 (0-23)

    Returns:
        시간대 요인 목록 (0 또는 1개)
    """
    if hour >= 22 or hour < 5:
        return [ScoreFactor(factor="Late Night", impact=-30, severity="high")]
    if 5 <= hour < 8:
        return [ScoreFactor(factor="Early Morning", impact=-15, severity="medium")]
    return []

def resource_factors(police_count: int, hospital_count: int) -> List[ScoreFactor]:
    """주변 경찰서/병원 수에 따른 요인을 계산합니다."""
    factors: List[ScoreFactor] = []

    if police_count == 0:
        factors.append(ScoreFactor(factor="No Police Nearby", impact=-20, severity="high"))
    elif police_count < 2:
        factors.append(ScoreFactor(factor="Limited Police Coverage", impact=-10, severity="medium"))

    if hospital_count == 0:
        factors.append(ScoreFactor(factor="No Hospital Nearby", impact=-15, severity="medium"))

    return factors

def classify(score: int) -> SafetyStatus:
    """점수를 상태 등급으로 분류합니다."""
    for limit, status in STATUS_THRESHOLDS:
        if score < limit:
            return status
    return "Safe"

def recommendations_for(score: int, factors: List[ScoreFactor]) -> List[str]:
    """점수와 요인에 따른 권장 사항을 생성합니다."""
    recs: List[str] = []

    if score < 60:
        recs.append("Consider using the journey tracker")
        recs.append("Share your live location with trusted contacts")

    if any("Police" in f.factor for f in factors):
        recs.append("Keep emergency numbers handy")

    if any("Late Night" in f.factor for f in factors):
        recs.append("Avoid isolated areas")
        recs.append("Use well-lit, busy routes")
        recs.append("Consider using taxi/rideshare instead of walking")

    recs.append(FINAL_RECOMMENDATION)
    return recs

def assess(now: datetime, police_count: int, hospital_count: int, *,
           degraded: bool = False) -> SafetyAssessment:
    """
    시각과 주변 자원 수를 기반으로 안전 평가를 수행합니다.

    Args:
        now: 평가 시각 (현지 시간)
        police_count: 5km 내 경찰서 수
        hospital_count: 5km 내 병원 수
        degraded: 자원 수 조회 실패로 0을 대신 사용했는지 여부

    Returns:
        안전 평가 결과
    """
    # 시간대 요인이 자원 요인보다 먼저 누적됨
    factors = time_factors(now.hour) + resource_factors(police_count, hospital_count)

    score = BASE_SCORE + sum(f.impact for f in factors)
    score = max(0, min(100, score))

    return SafetyAssessment(
        score=score,
        status=classify(score),
        factors=factors,
        recommendations=recommendations_for(score, factors),
        nearby_resources={"police": police_count, "hospital": hospital_count},
        degraded=degraded,
    )
