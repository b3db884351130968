"""
Overpass 클라이언트 테스트

실제 네트워크 호출 없이 _fetch를 대체해 검증합니다.
"""

import asyncio
import aiohttp
import pytest
from unittest.mock import AsyncMock, patch
from safeher.adapters.overpass.client import (
    OverpassClient, build_query, parse_elements, parse_tag_filter,
)
from safeher.core.errors import UpstreamUnavailable
from safeher.core.models import Coordinate

ORIGIN = Coordinate(lat=21.1458, lng=79.0882)

SAMPLE_RESPONSE = {
    "version": 0.6,
    "elements": [
        {
            "type": "node", "id": 101, "lat": 21.15, "lon": 79.09,
            "tags": {"amenity": "police", "name": "Sitabuldi Police Station", "phone": "100"},
        },
        {
            "type": "way", "id": 202, "center": {"lat": 21.14, "lon": 79.08},
            "tags": {"amenity": "hospital"},
        },
        {
            "type": "relation", "id": 303,
            "tags": {"social_facility": "shelter", "social_facility:for": "women"},
        },
    ],
}


class TestQueryBuilding:
    """쿼리 생성 테스트"""

    def test_parse_tag_filter(self):
        assert parse_tag_filter("amenity=hospital|amenity=clinic") == [
            ("amenity", "hospital"), ("amenity", "clinic"),
        ]
        assert parse_tag_filter("social_facility:for=women") == [("social_facility:for", "women")]

    @pytest.mark.parametrize("bad", ["amenity", "=police", "amenity="])
    def test_parse_tag_filter_rejects_bad_clause(self, bad):
        with pytest.raises(ValueError):
            parse_tag_filter(bad)

    def test_build_query(self):
        query = build_query("amenity=hospital|amenity=clinic", ORIGIN, 5000, timeout_sec=25)

        assert query == (
            "[out:json][timeout:25];\n"
            "(\n"
            '  nwr["amenity"="hospital"](around:5000,21.1458,79.0882);\n'
            '  nwr["amenity"="clinic"](around:5000,21.1458,79.0882);\n'
            ");\n"
            "out center;"
        )


class TestParseElements:
    """응답 파싱 테스트"""

    def test_parses_nodes_and_centers(self):
        cands = parse_elements(SAMPLE_RESPONSE)

        assert [c.id for c in cands] == ["node/101", "way/202", "relation/303"]
        assert (cands[0].lat, cands[0].lng) == (21.15, 79.09)
        assert cands[0].name == "Sitabuldi Police Station"
        assert cands[0].type == "police"
        assert (cands[1].lat, cands[1].lng) == (21.14, 79.08)
        assert cands[1].name is None
        assert cands[2].type == "shelter"
        assert cands[2].lat is None

    def test_skips_elements_without_id(self):
        assert parse_elements({"elements": [{"type": "node"}, "junk"]}) == []

    @pytest.mark.parametrize("data", [None, [], {"remark": "runtime error"}, {"elements": "x"}])
    def test_malformed_response(self, data):
        with pytest.raises(UpstreamUnavailable):
            parse_elements(data)


class TestOverpassClient:
    """클라이언트 오류 매핑 테스트"""

    @pytest.mark.asyncio
    async def test_query_success(self):
        client = OverpassClient(timeout=10)
        with patch.object(client, "_fetch", new=AsyncMock(return_value=SAMPLE_RESPONSE)) as fetch:
            cands = await client.query_points_of_interest("amenity=police", ORIGIN, 3000)

        query = fetch.await_args.args[0]
        assert query.startswith("[out:json][timeout:10];")
        assert "(around:3000,21.1458,79.0882)" in query
        assert len(cands) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,match", [
        (asyncio.TimeoutError(), "timed out"),
        (aiohttp.ClientConnectionError("refused"), "failed"),
        (ValueError("not json"), "malformed"),
    ])
    async def test_errors_map_to_upstream_unavailable(self, error, match):
        client = OverpassClient()
        with patch.object(client, "_fetch", new=AsyncMock(side_effect=error)):
            with pytest.raises(UpstreamUnavailable, match=match):
                await client.query_points_of_interest("amenity=police", ORIGIN, 5000)

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        client = OverpassClient()
        with patch.object(client, "_fetch", new=AsyncMock(return_value={"remark": "oops"})):
            with pytest.raises(UpstreamUnavailable):
                await client.query_points_of_interest("amenity=police", ORIGIN, 5000)

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self):
        async with OverpassClient() as client:
            session = client.session
            assert session is not None and not session.closed

        assert session.closed
        assert client.session is None
