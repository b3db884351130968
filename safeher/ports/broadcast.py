"""
Broadcast port interface.

This module defines the protocol for fan-out event publishing.
"""

from typing import Protocol

class BroadcastPort(Protocol):
    """이벤트 브로드캐스트 포트 인터페이스"""

    async def publish(self, event: str, payload: dict) -> None:
        """
        현재 연결된 모든 구독자에게 이벤트를 발행합니다.

        전달은 최선 노력(at-most-once)이며 수신 확인을 기다리지 않습니다.

        Args:
            event: 이벤트/채널 이름
            payload: JSON 직렬화 가능한 페이로드

        Raises:
            BroadcastFailure: 채널을 사용할 수 없는 경우
        """
        ...
