"""
In-process publish/subscribe hub for SafeHer.

This module implements BroadcastPort for subscribers living in the
same process (WebSocket connections served by the HTTP app).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Set
from safeher.observability.logging_setup import get_logger
from safeher.observability import metrics

log = get_logger("safeher.pubsub")

class InMemoryPubSub:
    """프로세스 내 팬아웃 브로드캐스트 허브"""

    def __init__(self, queue_size: int = 100):
        """
        초기화합니다.

        Args:
            queue_size: 구독자별 대기열 크기 (가득 차면 해당 구독자에게는 버림)
        """
        self.queue_size = queue_size
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue]:
        """
        구독을 등록하고 이벤트 대기열을 반환합니다.

        컨텍스트를 벗어나면 구독이 해제됩니다. 구독 이전에 발행된
        이벤트는 전달되지 않습니다.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        metrics.ws_subscribers.set(len(self._subscribers))
        log.debug(f"구독자 등록 count:{len(self._subscribers)}")
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)
            metrics.ws_subscribers.set(len(self._subscribers))
            log.debug(f"구독자 해제 count:{len(self._subscribers)}")

    async def publish(self, event: str, payload: dict) -> None:
        """
        현재 구독자 전원에게 이벤트를 전달합니다.

        Args:
            event: 이벤트 이름
            payload: 이벤트 데이터
        """
        message: Dict = {"event": event, "data": payload}
        delivered = 0
        # 스냅샷 순회, await 없음
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
                delivered += 1
            except asyncio.QueueFull:
                log.warning(f"구독자 대기열 가득 참, 이벤트 버림 event:{event}")

        log.info(f"이벤트 발행 event:{event} delivered:{delivered}/{len(self._subscribers)}")
