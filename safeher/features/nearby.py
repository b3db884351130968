"""
Nearby help resource lookup for SafeHer.

This module provides the geo-resource locator that queries a
point-of-interest source and ranks the results by distance.
"""

from typing import Any, List
from safeher.core.locator import (
    DEFAULT_RADIUS_M, MAX_RESULTS, rank_candidates, resolve_type, tag_filter_for,
)
from safeher.core.models import Coordinate, RankedResource
from safeher.core.validation import parse_coordinate, parse_radius
from safeher.ports.poi_source import PointOfInterestPort
from safeher.observability.logging_setup import get_logger
from safeher.observability import metrics

log = get_logger("safeher.nearby")

def as_coordinate(origin: Any) -> Coordinate:
    """Coordinate, dict, (lat, lng) 튜플을 Coordinate로 변환합니다."""
    if isinstance(origin, Coordinate):
        return origin
    if isinstance(origin, dict):
        return parse_coordinate(origin.get("lat"), origin.get("lng"))
    if isinstance(origin, (tuple, list)) and len(origin) == 2:
        return parse_coordinate(origin[0], origin[1])
    return parse_coordinate(None, None)

class GeoResourceLocator:
    """주변 안전 자원 탐색기"""

    def __init__(self, source: PointOfInterestPort, *,
                 max_results: int = MAX_RESULTS,
                 default_radius_m: int = DEFAULT_RADIUS_M):
        """
        초기화합니다.

        Args:
            source: POI 조회 포트
            max_results: 최대 반환 개수
            default_radius_m: 반경 미지정 시 사용할 반경 (미터)
        """
        self.source = source
        self.max_results = max_results
        self.default_radius_m = default_radius_m

    async def find_nearby(self,
                          origin: Any,
                          resource_type: str | None = "police",
                          radius_m: Any = None) -> List[RankedResource]:
        """
        반경 내 가까운 자원을 거리순으로 반환합니다.

        Args:
            origin: 사용자 좌표
            resource_type: police | hospital | pharmacy | women-help | all
            radius_m: 검색 반경 (미터, None이면 기본 반경)

        Returns:
            최대 max_results개의 RankedResource (결과 없음은 빈 목록)

        Raises:
            InvalidArgument: 좌표 또는 반경이 잘못된 경우
            UpstreamUnavailable: POI 소스 조회 실패
        """
        coord = as_coordinate(origin)
        radius = parse_radius(radius_m, self.default_radius_m)
        rtype = resolve_type(resource_type)
        if rtype != resource_type:
            log.debug(f"알 수 없는 자원 유형, police로 대체 requested:{resource_type}")

        metrics.nearby_queries.labels(type=rtype).inc()
        candidates = await self.source.query_points_of_interest(tag_filter_for(rtype), coord, radius)

        ranked = rank_candidates(
            coord, candidates,
            resource_type=rtype,
            radius_m=radius,
            limit=self.max_results,
        )
        log.info(f"주변 자원 조회 완료 type:{rtype} radius:{radius}m "
                 f"candidates:{len(candidates)} results:{len(ranked)}")
        return ranked

class LocatorResourceCounter:
    """탐색기 결과 개수를 자원 수로 사용하는 ResourceCountPort 구현"""

    def __init__(self, locator: GeoResourceLocator):
        self.locator = locator

    async def count(self, origin: Coordinate, resource_type: str, radius_m: int) -> int:
        return len(await self.locator.find_nearby(origin, resource_type, radius_m))
