"""
Service wiring for SafeHer.

Builds the adapters and feature services from Settings and owns
their startup/shutdown so the HTTP app can drive them from its lifespan.
"""

from dataclasses import dataclass
from typing import Optional
from safeher.adapters.mqtt.publisher_async import MqttBroadcaster
from safeher.adapters.overpass.client import OverpassClient
from safeher.adapters.pubsub.memory import InMemoryPubSub
from safeher.core.errors import BroadcastFailure
from safeher.features.nearby import GeoResourceLocator, LocatorResourceCounter
from safeher.features.safety_score import SafetyScorer, local_clock
from safeher.features.sos import SOSBroadcaster
from safeher.settings import Settings
from safeher.observability.logging_setup import get_logger

log = get_logger("safeher.bootstrap")

@dataclass
class Services:
    """HTTP 계층이 사용하는 서비스 묶음"""
    locator: GeoResourceLocator
    scorer: SafetyScorer
    broadcaster: SOSBroadcaster
    pubsub: Optional[InMemoryPubSub] = None
    overpass: Optional[OverpassClient] = None
    mqtt: Optional[MqttBroadcaster] = None

    async def start(self) -> None:
        """외부 연결을 시작합니다."""
        if self.mqtt is not None:
            try:
                await self.mqtt.start()
            except BroadcastFailure as e:
                # 연결 없이 기동, SOS 요청은 호출자에게 실패로 반환됨
                log.error(f"MQTT 연결 없이 시작합니다: {e}")

    async def stop(self) -> None:
        """외부 연결을 정리합니다."""
        if self.mqtt is not None:
            await self.mqtt.stop()
        if self.overpass is not None:
            await self.overpass.close()

def build_services(settings: Settings) -> Services:
    """
    설정으로부터 어댑터와 서비스를 생성합니다.

    Args:
        settings: 애플리케이션 설정

    Returns:
        연결 전 상태의 Services
    """
    overpass = OverpassClient(
        url=settings.overpass.url,
        timeout=settings.overpass.timeout_sec,
        user_agent=settings.overpass.user_agent,
    )
    locator = GeoResourceLocator(
        overpass,
        max_results=settings.locator.max_results,
        default_radius_m=settings.locator.default_radius_m,
    )
    scorer = SafetyScorer(
        LocatorResourceCounter(locator),
        clock=local_clock(settings.scoring.timezone),
        radius_m=settings.scoring.resource_radius_m,
    )

    backend = settings.broadcast.backend.lower()
    pubsub: Optional[InMemoryPubSub] = None
    mqtt: Optional[MqttBroadcaster] = None

    if backend == "mqtt":
        m = settings.mqtt
        mqtt = MqttBroadcaster(
            broker_host=m.host,
            broker_port=m.port,
            topic_prefix=m.topic_prefix,
            username=m.username,
            password=m.password,
            tls=m.tls,
            client_id=m.client_id,
            keepalive=m.keepalive,
            lwt_topic=m.lwt_topic,
            connect_max_retries=m.connect_max_retries,
            backoff_initial=m.backoff_initial_sec,
            backoff_max=m.backoff_max_sec,
        )
        broadcaster = SOSBroadcaster(mqtt, backend="mqtt")
    elif backend == "memory":
        pubsub = InMemoryPubSub(queue_size=settings.broadcast.subscriber_queue_size)
        broadcaster = SOSBroadcaster(pubsub, backend="memory")
    else:
        raise ValueError(f"지원하지 않는 브로드캐스트 백엔드: {settings.broadcast.backend}")

    log.info(f"서비스 구성 완료 broadcast:{backend} overpass:{settings.overpass.url}")
    return Services(
        locator=locator,
        scorer=scorer,
        broadcaster=broadcaster,
        pubsub=pubsub,
        overpass=overpass,
        mqtt=mqtt,
    )
