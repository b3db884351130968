"""
SOS broadcast service for SafeHer.

This module validates an SOS trigger, builds the alert and fans it
out through the injected broadcast channel.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional
from safeher.core.errors import BroadcastFailure
from safeher.core.models import SOSAlert
from safeher.core.sos import SOS_EVENT, build_alert, new_alert_id
from safeher.core.validation import parse_sos_location
from safeher.ports.broadcast import BroadcastPort
from safeher.observability.logging_setup import get_logger, with_context
from safeher.observability import metrics

log = get_logger("safeher.sos")

class SOSBroadcaster:
    """SOS 경보 브로드캐스터"""

    def __init__(self,
                 channel: BroadcastPort,
                 *,
                 backend: str = "memory",
                 clock: Optional[Callable[[], datetime]] = None,
                 id_factory: Optional[Callable[[datetime], str]] = None):
        """
        초기화합니다.

        Args:
            channel: 브로드캐스트 포트
            backend: 메트릭 라벨용 백엔드 이름
            clock: 현재 시각 공급자 (UTC)
            id_factory: 경보 ID 생성기
        """
        self.channel = channel
        self.backend = backend
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.id_factory = id_factory or new_alert_id

    async def trigger_sos(self, location: Any, message: Optional[str] = None) -> SOSAlert:
        """
        SOS 경보를 생성해 현재 연결된 모든 구독자에게 발행합니다.

        발행 호출이 끝나면 즉시 반환하며 수신 확인은 기다리지 않습니다.

        Args:
            location: lat/lng(필수)와 accuracy를 가진 위치
            message: 사용자 메시지

        Returns:
            발행된 SOS 경보

        Raises:
            InvalidArgument: 위치가 없거나 잘못된 경우 (발행하지 않음)
            BroadcastFailure: 채널 발행 실패
        """
        loc = parse_sos_location(location)
        now = self.clock()
        alert = build_alert(loc, message, now, self.id_factory(now))

        with with_context(alert_id=alert.alert_id):
            try:
                await self.channel.publish(SOS_EVENT, alert.to_event())
            except BroadcastFailure:
                metrics.sos_broadcast_failures.labels(backend=self.backend).inc()
                log.error(f"SOS 발행 실패 alert_id:{alert.alert_id} backend:{self.backend}")
                raise

        metrics.sos_triggered.inc()
        log.warning(f"SOS 발행됨 alert_id:{alert.alert_id} lat:{loc.lat} lng:{loc.lng}")
        return alert
