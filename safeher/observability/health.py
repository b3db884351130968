"""
HTTP application for SafeHer.

This module builds the FastAPI app: health, readiness, metrics and
info endpoints plus the safety/SOS API routes.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from safeher.api.routes import build_router
from safeher.bootstrap import Services, build_services
from safeher.core.errors import BroadcastFailure, InvalidArgument, UpstreamUnavailable
from safeher.settings import Settings
from safeher.observability.logging_setup import get_logger
from safeher.observability import metrics

log = get_logger("safeher.http")

def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "message": message})

def create_app(settings: Settings, services: Optional[Services] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    services = services or build_services(settings)
    start_time = time.time()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await services.start()
        log.info("서비스 시작됨")
        try:
            yield
        finally:
            await services.stop()
            log.info("서비스 종료됨")

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="SafeHer location safety service",
        lifespan=lifespan,
    )
    app.state.services = services

    # ---- 도메인 오류 → HTTP ----

    @app.exception_handler(InvalidArgument)
    async def invalid_argument(request: Request, exc: InvalidArgument):
        log.info(f"잘못된 요청 path:{request.url.path} error:{exc}")
        return _error(400, str(exc))

    @app.exception_handler(UpstreamUnavailable)
    async def upstream_unavailable(request: Request, exc: UpstreamUnavailable):
        return _error(503, f"Failed to find nearby places: {exc}")

    @app.exception_handler(BroadcastFailure)
    async def broadcast_failure(request: Request, exc: BroadcastFailure):
        return _error(503, f"Failed to send SOS alert: {exc}")

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/api/health")
    async def api_health():
        """API 헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "message": f"{settings.observability.service_name} Server is running"
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트"""
        broadcast_ready = services.mqtt is None or services.mqtt.client is not None
        status = "ready" if broadcast_ready else "degraded"
        return JSONResponse({
            "status": status,
            "service": settings.observability.service_name,
            "broadcast": settings.broadcast.backend,
            "timestamp": time.time()
        }, status_code=200 if broadcast_ready else 503)

    @app.get("/metrics")
    async def prometheus_metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        metrics.uptime_seconds.set(time.time() - start_time)
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "broadcast_backend": settings.broadcast.backend
        })

    app.include_router(build_router(services))

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        endpoints = {
            "health": "/health",
            "ready": "/ready",
            "metrics": "/metrics",
            "info": "/info",
            "nearby": "/api/safety/nearby",
            "score": "/api/safety/score",
            "sos_send": "/api/sos/send",
        }
        if services.pubsub is not None:
            endpoints["sos_feed"] = "/ws/sos"
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": endpoints
        })

    return app
