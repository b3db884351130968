"""
SOS alert construction for SafeHer.

This module contains pure functions that build the SOS alert
and its identifier before it is handed to a broadcast channel.
"""

import secrets
from datetime import datetime, timezone
from typing import Any, Optional
from .errors import InvalidArgument
from .models import SOSAlert, SOSLocation

SOS_EVENT = "sos-triggered"

DEFAULT_SOS_MESSAGE = "Emergency assistance needed"

def new_alert_id(now: Optional[datetime] = None) -> str:
    """
    프로세스 내에서 충돌하지 않는 경보 ID를 생성합니다.

    시각(ms)과 무작위 토큰을 결합하므로 같은 ms에 발생한
    경보도 서로 다른 ID를 갖습니다.
    """
    now = now or datetime.now(timezone.utc)
    return f"sos_{int(now.timestamp() * 1000)}_{secrets.token_hex(6)}"

def _message_text(message: Any) -> str:
    if message is None:
        return ""
    if isinstance(message, str):
        return message.strip()
    if isinstance(message, (int, float)) and not isinstance(message, bool):
        return str(message)
    raise InvalidArgument(f"message must be a string: {message!r}")

def build_alert(location: SOSLocation,
                message: Any,
                now: datetime,
                alert_id: Optional[str] = None) -> SOSAlert:
    """
    SOS 경보를 생성합니다.

    Args:
        location: 검증된 SOS 위치
        message: 사용자 메시지 (비어 있으면 기본 문구, 숫자는 문자열로 변환)
        now: 발생 시각
        alert_id: 경보 ID (None이면 생성)

    Returns:
        SOS 경보 모델
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    text = _message_text(message)

    return SOSAlert(
        alert_id=alert_id or new_alert_id(now),
        location=location,
        message=text or DEFAULT_SOS_MESSAGE,
        timestamp=now.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
