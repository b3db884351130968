"""
Point-of-interest source port interface.

This module defines the protocol for querying nearby points of interest.
"""

from typing import List, Protocol
from safeher.core.models import Coordinate, ResourceCandidate

class PointOfInterestPort(Protocol):
    """POI 조회 포트 인터페이스"""

    async def query_points_of_interest(self,
                                       tag_filter: str,
                                       origin: Coordinate,
                                       radius_m: int) -> List[ResourceCandidate]:
        """
        태그 필터에 맞는 POI 후보를 조회합니다.

        Args:
            tag_filter: '|'로 연결된 key=value 절
            origin: 검색 중심 좌표
            radius_m: 검색 반경 (미터)

        Returns:
            원시 후보 목록

        Raises:
            UpstreamUnavailable: 조회 실패, 타임아웃, 잘못된 응답
        """
        ...
