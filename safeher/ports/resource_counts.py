"""
Resource count port interface.

This module defines the protocol the safety scorer uses to
learn how many help resources are near a coordinate.
"""

from typing import Protocol
from safeher.core.models import Coordinate

class ResourceCountPort(Protocol):
    """주변 자원 수 조회 포트 인터페이스"""

    async def count(self, origin: Coordinate, resource_type: str, radius_m: int) -> int:
        """
        반경 내 자원 수를 반환합니다.

        Raises:
            UpstreamUnavailable: 외부 소스 조회 실패
        """
        ...
