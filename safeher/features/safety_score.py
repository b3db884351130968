"""
Safety scoring service for SafeHer.

This module combines the pure scoring rules with live resource
counts and a wall-clock source.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, Optional, Tuple
from zoneinfo import ZoneInfo
from safeher.core.errors import UpstreamUnavailable
from safeher.core.models import Coordinate, SafetyAssessment
from safeher.core.scoring import assess
from safeher.features.nearby import as_coordinate
from safeher.ports.resource_counts import ResourceCountPort
from safeher.observability.logging_setup import get_logger
from safeher.observability import metrics

log = get_logger("safeher.score")

Clock = Callable[[], datetime]

def local_clock(timezone: str | None = None) -> Clock:
    """현지 시각을 반환하는 시계를 만듭니다 (timezone이 None이면 서버 시간)."""
    if timezone:
        tz = ZoneInfo(timezone)
        return lambda: datetime.now(tz)
    return datetime.now

class SafetyScorer:
    """위치 안전 점수 산정기"""

    def __init__(self,
                 counts: ResourceCountPort,
                 *,
                 clock: Optional[Clock] = None,
                 radius_m: int = 5000):
        """
        초기화합니다.

        Args:
            counts: 주변 자원 수 조회 포트
            clock: 현재 시각 공급자
            radius_m: 자원 수를 셀 반경 (미터)
        """
        self.counts = counts
        self.clock = clock or datetime.now
        self.radius_m = radius_m

    async def _count_or_zero(self, origin: Coordinate, resource_type: str) -> Tuple[int, bool]:
        try:
            return await self.counts.count(origin, resource_type, self.radius_m), False
        except UpstreamUnavailable as e:
            # 점수가 없는 것보다 보수적인 점수가 안전함
            log.warning(f"자원 수 조회 실패, 0으로 간주 type:{resource_type} error:{e}")
            return 0, True

    async def compute_score(self, origin: Any, now: Optional[datetime] = None) -> SafetyAssessment:
        """
        위치와 시각을 기반으로 안전 평가를 수행합니다.

        Args:
            origin: 사용자 좌표
            now: 평가 시각 (None이면 clock 사용)

        Returns:
            안전 평가 결과

        Raises:
            InvalidArgument: 좌표가 잘못된 경우
        """
        coord = as_coordinate(origin)
        now = now or self.clock()

        (police, police_failed), (hospital, hospital_failed) = await asyncio.gather(
            self._count_or_zero(coord, "police"),
            self._count_or_zero(coord, "hospital"),
        )
        degraded = police_failed or hospital_failed

        result = assess(now, police, hospital, degraded=degraded)

        metrics.scores_computed.labels(status=result.status).inc()
        metrics.safety_score.observe(result.score)
        if degraded:
            metrics.scores_degraded.inc()

        log.info(f"안전 점수 산정 완료 score:{result.score} status:{result.status} "
                 f"hour:{now.hour} police:{police} hospital:{hospital} degraded:{degraded}")
        return result
