"""
SafetyScorer 테스트
"""

import pytest
from datetime import datetime
from zoneinfo import ZoneInfo
from safeher.core.errors import InvalidArgument
from safeher.features.safety_score import SafetyScorer, local_clock


class TestComputeScore:
    """안전 점수 산정 테스트"""

    @pytest.mark.asyncio
    async def test_safe_afternoon(self, counter_factory, origin, afternoon):
        counter = counter_factory(police=2, hospital=1)
        scorer = SafetyScorer(counter, radius_m=5000)

        result = await scorer.compute_score(origin, now=afternoon)

        assert result.score == 100
        assert result.status == "Safe"
        assert result.degraded is False
        assert sorted(call[1] for call in counter.calls) == ["hospital", "police"]
        assert all(call[2] == 5000 for call in counter.calls)

    @pytest.mark.asyncio
    async def test_uses_clock_when_now_missing(self, counter_factory, origin, late_night):
        scorer = SafetyScorer(counter_factory(police=2, hospital=1), clock=lambda: late_night)

        result = await scorer.compute_score(origin)

        assert result.score == 70
        assert result.factors[0].factor == "Late Night"

    @pytest.mark.asyncio
    async def test_no_police_subtracts_twenty(self, counter_factory, origin, afternoon):
        scorer = SafetyScorer(counter_factory(police=0, hospital=1))
        result = await scorer.compute_score(origin, now=afternoon)

        assert result.score == 80
        assert [f.factor for f in result.factors] == ["No Police Nearby"]

    @pytest.mark.asyncio
    async def test_failed_count_is_degraded_zero(self, counter_factory, origin, afternoon):
        scorer = SafetyScorer(counter_factory(police=3, hospital=2, fail=["hospital"]))

        result = await scorer.compute_score(origin, now=afternoon)

        assert result.degraded is True
        assert result.nearby_resources == {"police": 3, "hospital": 0}
        assert result.score == 85

    @pytest.mark.asyncio
    async def test_both_counts_failed(self, counter_factory, origin, late_night):
        scorer = SafetyScorer(counter_factory(fail=["police", "hospital"]))

        result = await scorer.compute_score(origin, now=late_night)

        assert result.degraded is True
        assert result.score == 35
        assert result.status == "High Risk"

    @pytest.mark.asyncio
    async def test_invalid_origin(self, counter_factory):
        counter = counter_factory()
        scorer = SafetyScorer(counter)

        with pytest.raises(InvalidArgument):
            await scorer.compute_score({"lat": None, "lng": 79.0})
        assert counter.calls == []


class TestLocalClock:
    """시계 생성 테스트"""

    def test_timezone_clock(self):
        now = local_clock("Asia/Kolkata")()
        assert now.tzinfo == ZoneInfo("Asia/Kolkata")

    def test_server_clock(self):
        now = local_clock(None)()
        assert isinstance(now, datetime)
        assert now.tzinfo is None
