"""
Nearby resource ranking for SafeHer.

This module contains pure functions that map resource types to
point-of-interest tag filters and rank raw candidates by distance.
"""

from typing import Dict, Iterable, List, NamedTuple
from safeher.common.geo import haversine_distance, round_km
from .models import Coordinate, RankedResource, ResourceCandidate

# 반환 결과 최대 개수
MAX_RESULTS = 10

# 기본 검색 반경 (미터)
DEFAULT_RADIUS_M = 5000

class ResourceTypeConfig(NamedTuple):
    """자원 유형별 태그 필터와 기본 이름"""
    tag_filter: str
    fallback_name: str

RESOURCE_TYPES: Dict[str, ResourceTypeConfig] = {
    "police": ResourceTypeConfig("amenity=police", "Police Station"),
    "hospital": ResourceTypeConfig("amenity=hospital|amenity=clinic", "Hospital"),
    "pharmacy": ResourceTypeConfig("amenity=pharmacy", "Pharmacy"),
    "women-help": ResourceTypeConfig("amenity=police|social_facility:for=women", "Women Help Desk"),
}

# 'all' 조회 시 후보 자체의 유형으로 기본 이름을 고릅니다
CANDIDATE_FALLBACK_NAMES: Dict[str, str] = {
    "police": "Police Station",
    "hospital": "Hospital",
    "clinic": "Hospital",
    "pharmacy": "Pharmacy",
    "social_facility": "Women Help Desk",
}

GENERIC_FALLBACK_NAME = "Help Resource"

def resolve_type(resource_type: str | None) -> str:
    """알 수 없는 유형은 police로 처리합니다."""
    if resource_type == "all" or resource_type in RESOURCE_TYPES:
        return resource_type
    return "police"

def tag_filter_for(resource_type: str | None) -> str:
    """
    자원 유형을 POI 태그 필터로 변환합니다.

    Args:
        resource_type: police | hospital | pharmacy | women-help | all

    Returns:
        '|'로 연결된 key=value 절 문자열
    """
    rtype = resolve_type(resource_type)
    if rtype == "all":
        clauses: List[str] = []
        for cfg in RESOURCE_TYPES.values():
            for clause in cfg.tag_filter.split("|"):
                if clause not in clauses:
                    clauses.append(clause)
        return "|".join(clauses)
    return RESOURCE_TYPES[rtype].tag_filter

def fallback_name_for(resource_type: str | None, candidate: ResourceCandidate) -> str:
    """이름이 없는 후보에 사용할 기본 이름을 반환합니다."""
    rtype = resolve_type(resource_type)
    if rtype == "all":
        return CANDIDATE_FALLBACK_NAMES.get(candidate.type, GENERIC_FALLBACK_NAME)
    return RESOURCE_TYPES[rtype].fallback_name

def rank_candidates(
    origin: Coordinate,
    candidates: Iterable[ResourceCandidate],
    *,
    resource_type: str | None = "police",
    radius_m: int = DEFAULT_RADIUS_M,
    limit: int = MAX_RESULTS,
) -> List[RankedResource]:
    """
    후보를 거리순으로 정렬하고 반경 내 상위 N개를 반환합니다.

    좌표가 없는 후보는 제외되며, 같은 거리는 원래 순서를 유지합니다.

    Args:
        origin: 사용자 좌표
        candidates: 외부 소스의 원시 후보
        resource_type: 요청된 자원 유형 (기본 이름 결정용)
        radius_m: 검색 반경 (미터)
        limit: 최대 반환 개수

    Returns:
        거리 오름차순 RankedResource 목록
    """
    max_km = radius_m / 1000
    ranked: List[RankedResource] = []

    for cand in candidates:
        if cand.lat is None or cand.lng is None:
            continue

        distance = round_km(haversine_distance(origin.lat, origin.lng, cand.lat, cand.lng))
        if distance > max_km:
            continue

        tags = cand.tags
        ranked.append(RankedResource(
            id=cand.id,
            name=cand.name or fallback_name_for(resource_type, cand),
            type=cand.type,
            lat=cand.lat,
            lng=cand.lng,
            distance_km=distance,
            address=tags.get("addr:street") or tags.get("address") or "",
            phone=tags.get("phone") or "",
            opening_hours=tags.get("opening_hours") or "",
            tags=tags,
        ))

    # sorted()는 안정 정렬
    ranked = sorted(ranked, key=lambda r: r.distance_km)
    return ranked[:limit]
