"""
HTTP server runner for SafeHer.

This module provides a simple way to run the FastAPI app with uvicorn.
"""

import uvicorn
from fastapi import FastAPI
from safeher.observability.health import create_app
from safeher.settings import Settings
from safeher.observability.logging_setup import get_logger

def run_http_server(settings: Settings, app: FastAPI | None = None,
                    host: str | None = None, port: int | None = None) -> None:
    """
    HTTP 서버를 실행합니다.

    Args:
        settings: 애플리케이션 설정
        app: 실행할 앱 (None이면 설정으로 생성)
        host: 바인딩할 호스트 (None이면 설정에서 가져옴)
        port: 바인딩할 포트 (None이면 설정에서 가져옴)
    """
    log = get_logger("safeher.observability")

    host = host or settings.observability.http_host
    port = port or settings.observability.http_port
    app = app or create_app(settings)

    log.info(f"HTTP 서버 시작 중 host:{host} port:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.observability.log_level.lower(),
        access_log=True,
        log_config=None,
    )
