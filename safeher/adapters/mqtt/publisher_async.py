"""
MQTT broadcast publisher adapter for SafeHer.

This module implements BroadcastPort by publishing events to an
MQTT broker; every client subscribed to the topic receives them.
"""

import json
import ssl
from contextlib import AsyncExitStack
from typing import Optional
from aiomqtt import Client, MqttError, Will
from safeher.common.retry import retry_with_backoff
from safeher.core.errors import BroadcastFailure
from safeher.observability.logging_setup import get_logger

log = get_logger("safeher.mqtt")

class MqttBroadcaster:
    """MQTT 브로드캐스트 어댑터 (QoS 0, at-most-once)"""

    def __init__(self,
                 *,
                 broker_host: str,
                 broker_port: int = 1883,
                 topic_prefix: str = "safeher",
                 username: str | None = None,
                 password: str | None = None,
                 tls: bool = False,
                 client_id: str | None = None,
                 keepalive: int = 30,
                 lwt_topic: str = "safeher/state",
                 connect_max_retries: int = 5,
                 backoff_initial: float = 0.5,
                 backoff_max: float = 30.0):
        """
        초기화합니다.

        Args:
            broker_host: MQTT 브로커 호스트
            broker_port: MQTT 브로커 포트
            topic_prefix: 토픽 접두사 (이벤트 이름이 뒤에 붙음)
            username: 사용자명
            password: 비밀번호
            tls: TLS 사용 여부
            client_id: 클라이언트 ID
            keepalive: keepalive 시간
            lwt_topic: Last Will and Testament 토픽
            connect_max_retries: 연결 최대 재시도 횟수
            backoff_initial: 초기 백오프 시간
            backoff_max: 최대 백오프 시간
        """
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic_prefix = topic_prefix.rstrip("/")
        self.username = username
        self.password = password
        self.tls = tls
        self.client_id = client_id
        self.keepalive = keepalive
        self.lwt_topic = lwt_topic
        self.connect_max_retries = connect_max_retries
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max

        self.client: Optional[Client] = None
        self._stack: Optional[AsyncExitStack] = None

    def _build_client(self) -> Client:
        kwargs = {
            "hostname": self.broker_host,
            "port": self.broker_port,
            "keepalive": self.keepalive,
            "will": Will(self.lwt_topic, "offline", qos=1, retain=True),
        }
        if self.username:
            kwargs["username"] = self.username
        if self.password:
            kwargs["password"] = self.password
        if self.client_id:
            kwargs["identifier"] = self.client_id
        if self.tls:
            kwargs["tls_context"] = ssl.create_default_context()
        return Client(**kwargs)

    async def _connect_once(self) -> None:
        stack = AsyncExitStack()
        try:
            client = await stack.enter_async_context(self._build_client())
        except BaseException:
            await stack.aclose()
            raise
        self._stack = stack
        self.client = client

    async def _drop_connection(self) -> None:
        """끊어진 연결을 정리합니다 (다음 발행 시 재연결)."""
        stack, self._stack, self.client = self._stack, None, None
        if stack is not None:
            try:
                await stack.aclose()
            except MqttError as e:
                log.warning(f"MQTT 연결 정리 중 오류: {e}")

    async def start(self) -> None:
        """브로커에 연결합니다 (지수 백오프 재시도)."""
        try:
            await retry_with_backoff(
                self._connect_once,
                max_retries=self.connect_max_retries,
                base_delay=self.backoff_initial,
                max_delay=self.backoff_max,
                retry_on=(MqttError,),
            )
            await self.client.publish(self.lwt_topic, "online", qos=1, retain=True)
        except MqttError as e:
            await self._drop_connection()
            log.error(f"MQTT 브로커 연결 최종 실패 {self.broker_host}:{self.broker_port} error:{e}")
            raise BroadcastFailure(f"MQTT broker unavailable: {e}") from e

        log.info(f"MQTT 브로커 연결됨: {self.broker_host}:{self.broker_port}")

    async def publish(self, event: str, payload: dict) -> None:
        """
        이벤트를 {topic_prefix}/{event} 토픽으로 발행합니다.

        연결이 없으면 한 번 재연결을 시도하고, 발행은 한 번만 시도합니다.

        Raises:
            BroadcastFailure: 연결할 수 없거나 발행 실패
        """
        if self.client is None:
            try:
                await self._connect_once()
            except MqttError as e:
                log.error(f"MQTT 재연결 실패 {self.broker_host}:{self.broker_port} error:{e}")
                raise BroadcastFailure(f"MQTT client is not connected: {e}") from e
            log.info(f"MQTT 브로커 재연결됨: {self.broker_host}:{self.broker_port}")

        topic = f"{self.topic_prefix}/{event}"
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        try:
            await self.client.publish(topic, body, qos=0, retain=False)
        except MqttError as e:
            await self._drop_connection()
            log.error(f"MQTT 발행 실패 topic:{topic} error:{e}")
            raise BroadcastFailure(f"MQTT publish failed: {e}") from e

        log.info(f"MQTT 발행 성공 topic:{topic}")

    async def stop(self) -> None:
        """연결을 종료합니다."""
        if self._stack is not None:
            try:
                await self.client.publish(self.lwt_topic, "offline", qos=1, retain=True)
            except MqttError as e:
                log.warning(f"오프라인 상태 발행 실패: {e}")
            log.info("MQTT 연결 종료됨")
        await self._drop_connection()
