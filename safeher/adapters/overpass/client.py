"""
Overpass API client for SafeHer.

This module implements PointOfInterestPort on top of the
OpenStreetMap Overpass interpreter endpoint.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple
import aiohttp
from safeher.core.errors import UpstreamUnavailable
from safeher.core.models import Coordinate, ResourceCandidate
from safeher.observability.logging_setup import get_logger
from safeher.observability import metrics

log = get_logger("safeher.overpass")

def parse_tag_filter(tag_filter: str) -> List[Tuple[str, str]]:
    """'amenity=hospital|amenity=clinic' 형식을 (key, value) 목록으로 변환합니다."""
    clauses: List[Tuple[str, str]] = []
    for part in tag_filter.split("|"):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise ValueError(f"잘못된 태그 필터 절: {part!r}")
        clauses.append((key.strip(), value.strip()))
    return clauses

def build_query(tag_filter: str, origin: Coordinate, radius_m: int, timeout_sec: int = 25) -> str:
    """
    Overpass QL 쿼리를 생성합니다.

    Args:
        tag_filter: '|'로 연결된 key=value 절
        origin: 검색 중심 좌표
        radius_m: 검색 반경 (미터)
        timeout_sec: 서버 측 타임아웃 (초)

    Returns:
        Overpass QL 문자열
    """
    around = f"(around:{int(radius_m)},{origin.lat},{origin.lng})"
    lines = [f'  nwr["{k}"="{v}"]{around};' for k, v in parse_tag_filter(tag_filter)]
    body = "\n".join(lines)
    return f"[out:json][timeout:{timeout_sec}];\n(\n{body}\n);\nout center;"

def _element_coords(el: Dict[str, Any]) -> Tuple[Optional[float], Optional[float]]:
    # node는 lat/lon, way/relation은 out center의 center.lat/lon
    if el.get("lat") is not None and el.get("lon") is not None:
        return float(el["lat"]), float(el["lon"])
    center = el.get("center") or {}
    if center.get("lat") is not None and center.get("lon") is not None:
        return float(center["lat"]), float(center["lon"])
    return None, None

def parse_elements(data: Any) -> List[ResourceCandidate]:
    """
    Overpass JSON 응답을 ResourceCandidate 목록으로 변환합니다.

    Raises:
        UpstreamUnavailable: 응답 형식이 잘못된 경우
    """
    if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
        raise UpstreamUnavailable("Overpass 응답 형식이 올바르지 않습니다")

    candidates: List[ResourceCandidate] = []
    for el in data["elements"]:
        if not isinstance(el, dict) or "id" not in el:
            continue
        tags = {str(k): str(v) for k, v in (el.get("tags") or {}).items()}
        try:
            lat, lng = _element_coords(el)
        except (TypeError, ValueError):
            lat, lng = None, None

        osm_type = el.get("type")
        candidates.append(ResourceCandidate(
            id=f"{osm_type}/{el['id']}" if osm_type else str(el["id"]),
            name=tags.get("name"),
            type=tags.get("amenity") or tags.get("social_facility") or "unknown",
            lat=lat,
            lng=lng,
            tags=tags,
        ))
    return candidates

class OverpassClient:
    """Overpass API 클라이언트"""

    def __init__(self,
                 url: str = "https://overpass-api.de/api/interpreter",
                 timeout: int = 25,
                 user_agent: str = "safeher-core/0.1"):
        """
        초기화합니다.

        Args:
            url: Overpass interpreter URL
            timeout: 요청 타임아웃 (초), 쿼리의 [timeout:] 값으로도 사용
            user_agent: User-Agent 헤더
        """
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: Optional[aiohttp.ClientSession] = None

        log.info(f"Overpass 클라이언트 초기화됨 url:{url} timeout:{timeout}s")

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    async def close(self) -> None:
        """세션을 닫습니다."""
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def _fetch(self, query: str) -> Any:
        """Overpass에 쿼리를 전송하고 JSON을 반환합니다."""
        session = await self._ensure_session()
        async with session.post(self.url, data={"data": query}) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    async def query_points_of_interest(self,
                                       tag_filter: str,
                                       origin: Coordinate,
                                       radius_m: int) -> List[ResourceCandidate]:
        """
        태그 필터에 맞는 POI 후보를 조회합니다.

        Args:
            tag_filter: '|'로 연결된 key=value 절
            origin: 검색 중심 좌표
            radius_m: 검색 반경 (미터)

        Returns:
            원시 후보 목록 (응답 순서 유지)

        Raises:
            UpstreamUnavailable: 조회 실패, 타임아웃, 잘못된 응답
        """
        query = build_query(tag_filter, origin, radius_m, self.timeout)

        try:
            with metrics.overpass_seconds.time():
                data = await self._fetch(query)
        except asyncio.TimeoutError as e:
            metrics.upstream_failures.labels(reason="timeout").inc()
            log.warning(f"Overpass 조회 타임아웃 filter:{tag_filter} timeout:{self.timeout}s")
            raise UpstreamUnavailable(f"Overpass query timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            metrics.upstream_failures.labels(reason="http").inc()
            log.error(f"Overpass 조회 실패 filter:{tag_filter} error:{str(e)}")
            raise UpstreamUnavailable(f"Overpass query failed: {e}") from e
        except ValueError as e:
            metrics.upstream_failures.labels(reason="malformed").inc()
            log.error(f"Overpass 응답 파싱 실패 filter:{tag_filter} error:{str(e)}")
            raise UpstreamUnavailable(f"Overpass returned malformed data: {e}") from e

        try:
            candidates = parse_elements(data)
        except UpstreamUnavailable:
            metrics.upstream_failures.labels(reason="malformed").inc()
            raise

        log.info(f"Overpass 조회 완료 filter:{tag_filter} count:{len(candidates)}")
        return candidates
