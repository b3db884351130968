"""
Safety API routes for SafeHer.

Nearby resources, safety score, SOS trigger and the SOS WebSocket feed.
"""

from __future__ import annotations

import anyio
from typing import Any, Optional

from fastapi import APIRouter, Body, Query, WebSocket, WebSocketDisconnect

from safeher.bootstrap import Services
from safeher.core.errors import InvalidArgument
from safeher.core.validation import parse_coordinate
from safeher.observability.logging_setup import get_logger

log = get_logger("safeher.api")


def build_router(services: Services) -> APIRouter:
    """서비스 묶음에 바인딩된 API 라우터를 생성합니다."""
    router = APIRouter()

    # ---- Safety ---- #

    @router.get("/api/safety/nearby")
    async def nearby(
        lat: Optional[str] = Query(default=None),
        lng: Optional[str] = Query(default=None),
        type: Optional[str] = Query(default="police"),
        radius: Optional[str] = Query(default=None),
    ):
        """Return help resources near the coordinate, closest first."""
        origin = parse_coordinate(lat, lng)
        places = await services.locator.find_nearby(origin, type, radius)
        return {
            "success": True,
            "data": [p.model_dump(by_alias=True) for p in places],
            "count": len(places),
        }

    @router.get("/api/safety/score")
    async def score(
        lat: Optional[str] = Query(default=None),
        lng: Optional[str] = Query(default=None),
    ):
        """Return the safety assessment for the coordinate at the current time."""
        origin = parse_coordinate(lat, lng)
        result = await services.scorer.compute_score(origin)
        return {"success": True, "data": result.model_dump(by_alias=True)}

    # ---- SOS ---- #

    @router.post("/api/sos/send")
    async def sos_send(payload: Any = Body(default=None)):
        location = payload.get("location") if isinstance(payload, dict) else None
        if not isinstance(location, dict):
            raise InvalidArgument("Location is required")

        alert = await services.broadcaster.trigger_sos(location, payload.get("message"))
        return {
            "success": True,
            "message": "SOS alert sent successfully",
            "data": {"alertId": alert.alert_id},
        }

    if services.pubsub is not None:
        pubsub = services.pubsub

        @router.websocket("/ws/sos")
        async def sos_feed(websocket: WebSocket):
            # accept 전에 구독해야 핸드셰이크 직후 이벤트를 놓치지 않음
            async with pubsub.subscribe() as queue:
                await websocket.accept()

                async with anyio.create_task_group() as tg:

                    async def forward():
                        try:
                            while True:
                                await websocket.send_json(await queue.get())
                        except (WebSocketDisconnect, RuntimeError) as e:
                            log.warning(f"SOS 웹소켓 전송 중단: {e!r}")
                            tg.cancel_scope.cancel()

                    tg.start_soon(forward)

                    # 클라이언트 메시지는 버리고 연결 종료만 감지
                    while True:
                        message = await websocket.receive()
                        if message["type"] == "websocket.disconnect":
                            break
                    tg.cancel_scope.cancel()

                log.info("SOS 웹소켓 구독 종료")

    return router
