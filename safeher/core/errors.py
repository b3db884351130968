"""
Domain errors for SafeHer.

Adapters translate library exceptions into these so the
HTTP layer can map them to status codes in one place.
"""


class SafeHerError(Exception):
    """SafeHer 도메인 오류의 기반 클래스"""


class InvalidArgument(SafeHerError):
    """잘못된 입력 (호출자 오류, 재시도 불가)"""


class UpstreamUnavailable(SafeHerError):
    """외부 POI 소스 조회 실패 또는 타임아웃 (백오프 후 재시도 가능)"""


class BroadcastFailure(SafeHerError):
    """브로드캐스트 채널 사용 불가"""
