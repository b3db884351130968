"""
Logging configuration for SafeHer.

loguru is the single sink: a coloured console format for development and
one JSON object per line for deployments. Records from the stdlib loggers
used by uvicorn, aiohttp and aiomqtt are routed into loguru.
"""

from __future__ import annotations
import logging
from typing import Dict
from loguru import logger

SERVICE_NAME = "safeher"

# 라이브러리 로거별 최소 레벨 (서비스 로그 레벨보다 낮아지지 않음)
LIBRARY_LOGGERS: Dict[str, str] = {
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "WARNING",
    "aiohttp": "WARNING",
    "mqtt": "WARNING",
    "asyncio": "WARNING",
}

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

class InterceptHandler(logging.Handler):
    """stdlib logging 레코드를 원래 로거 이름과 함께 loguru로 전달합니다."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(name=record.name).opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _stdlib_level(name: str) -> int:
    # loguru 전용 레벨(TRACE, SUCCESS)은 DEBUG로 취급
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.DEBUG

def _route_stdlib(log_level: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    service_level = _stdlib_level(log_level)
    for name, min_level in LIBRARY_LOGGERS.items():
        lib = logging.getLogger(name)
        lib.handlers = [InterceptHandler()]
        lib.setLevel(max(_stdlib_level(min_level), service_level))
        lib.propagate = False

def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    loguru 싱크를 초기화합니다.

    Args:
        log_level: 서비스 로그 레벨
        json_logs: True면 한 줄당 JSON 객체(serialize), False면 컬러 콘솔
    """
    logger.remove()
    logger.configure(extra={"name": SERVICE_NAME})
    sink_opts = dict(level=log_level.upper(), backtrace=False, diagnose=False, enqueue=False)
    if json_logs:
        logger.add(sink=lambda m: print(m, end=""), serialize=True, **sink_opts)
    else:
        logger.add(sink=lambda m: print(m, end=""), format=CONSOLE_FORMAT, colorize=True, **sink_opts)
    _route_stdlib(log_level)

def get_logger(name: str = SERVICE_NAME, **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """컨텍스트 매니저로 일시 컨텍스트 부여."""
    return logger.contextualize(**ctx)
