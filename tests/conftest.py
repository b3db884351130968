"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import inspect
from datetime import datetime
from unittest.mock import AsyncMock
from safeher.core.models import Coordinate, ResourceCandidate
from safeher.settings import Settings


# 나그푸르 시내
ORIGIN = Coordinate(lat=21.1458, lng=79.0882)


def make_candidate(idx, dlat, dlng, *, name=None, type="police", tags=None, origin=ORIGIN):
    """원점 기준 오프셋으로 후보를 생성합니다."""
    return ResourceCandidate(
        id=f"node/{idx}",
        name=name,
        type=type,
        lat=origin.lat + dlat,
        lng=origin.lng + dlng,
        tags=tags or {},
    )


class StubCounter:
    """고정 자원 수를 반환하는 ResourceCountPort"""

    def __init__(self, police=2, hospital=1, fail=()):
        self.police = police
        self.hospital = hospital
        self.fail = set(fail)
        self.calls = []

    async def count(self, origin, resource_type, radius_m):
        from safeher.core.errors import UpstreamUnavailable
        self.calls.append((origin, resource_type, radius_m))
        if resource_type in self.fail:
            raise UpstreamUnavailable(f"{resource_type} lookup failed")
        return {"police": self.police, "hospital": self.hospital}[resource_type]


class RecordingChannel:
    """발행 내역을 기록하는 BroadcastPort"""

    def __init__(self):
        self.published = []

    async def publish(self, event, payload):
        self.published.append((event, payload))


@pytest.fixture
def origin():
    """테스트용 원점 좌표"""
    return ORIGIN


@pytest.fixture
def afternoon():
    """오후 2시"""
    return datetime(2026, 3, 1, 14, 0)


@pytest.fixture
def late_night():
    """새벽 2시"""
    return datetime(2026, 3, 1, 2, 0)


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    return settings


@pytest.fixture
def poi_source():
    """테스트용 POI 소스"""
    source = AsyncMock()
    source.query_points_of_interest.return_value = []
    return source


@pytest.fixture(name="make_candidate")
def make_candidate_fixture():
    """후보 생성 함수"""
    return make_candidate


@pytest.fixture
def counter_factory():
    """고정 자원 수 카운터 생성자"""
    return StubCounter


@pytest.fixture
def recording_channel():
    return RecordingChannel()


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
