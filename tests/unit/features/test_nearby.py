"""
GeoResourceLocator 테스트

POI 소스는 AsyncMock으로 대체합니다.
"""

import pytest
from safeher.core.errors import InvalidArgument, UpstreamUnavailable
from safeher.features.nearby import GeoResourceLocator, LocatorResourceCounter, as_coordinate


class TestAsCoordinate:
    """원점 변환 테스트"""

    def test_accepts_dict_and_tuple(self, origin):
        assert as_coordinate({"lat": "21.1458", "lng": "79.0882"}) == origin
        assert as_coordinate((21.1458, 79.0882)) == origin
        assert as_coordinate(origin) is origin

    def test_rejects_other(self):
        with pytest.raises(InvalidArgument, match="lat is required"):
            as_coordinate(None)


class TestFindNearby:
    """주변 자원 조회 테스트"""

    @pytest.mark.asyncio
    async def test_queries_source_with_tag_filter(self, poi_source, origin, make_candidate):
        poi_source.query_points_of_interest.return_value = [
            make_candidate(1, 0.02, 0.0),
            make_candidate(2, 0.005, 0.0),
        ]
        locator = GeoResourceLocator(poi_source)

        results = await locator.find_nearby(origin, "hospital", 3000)

        poi_source.query_points_of_interest.assert_awaited_once_with(
            "amenity=hospital|amenity=clinic", origin, 3000
        )
        assert [r.id for r in results] == ["node/2", "node/1"]
        assert results[0].name == "Hospital"

    @pytest.mark.asyncio
    async def test_default_radius(self, poi_source, origin):
        locator = GeoResourceLocator(poi_source, default_radius_m=2000)
        await locator.find_nearby(origin)

        args = poi_source.query_points_of_interest.await_args.args
        assert args == ("amenity=police", origin, 2000)

    @pytest.mark.asyncio
    async def test_unknown_type_uses_police(self, poi_source, origin):
        locator = GeoResourceLocator(poi_source)
        await locator.find_nearby(origin, "fire-station")

        assert poi_source.query_points_of_interest.await_args.args[0] == "amenity=police"

    @pytest.mark.asyncio
    async def test_empty_result_is_not_error(self, poi_source, origin):
        locator = GeoResourceLocator(poi_source)
        assert await locator.find_nearby(origin, "pharmacy") == []

    @pytest.mark.asyncio
    async def test_respects_max_results(self, poi_source, origin, make_candidate):
        poi_source.query_points_of_interest.return_value = [
            make_candidate(i, 0.001 * i, 0.0) for i in range(8)
        ]
        locator = GeoResourceLocator(poi_source, max_results=3)

        results = await locator.find_nearby(origin)
        assert [r.id for r in results] == ["node/0", "node/1", "node/2"]

    @pytest.mark.asyncio
    async def test_accepts_raw_origin(self, poi_source):
        locator = GeoResourceLocator(poi_source)
        await locator.find_nearby({"lat": "21.1458", "lng": "79.0882"})
        assert poi_source.query_points_of_interest.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("origin_raw", [{"lng": 79.0}, {"lat": 95, "lng": 79.0}, {"lat": "x", "lng": 1}])
    async def test_invalid_origin_does_not_query(self, poi_source, origin_raw):
        locator = GeoResourceLocator(poi_source)

        with pytest.raises(InvalidArgument):
            await locator.find_nearby(origin_raw)
        poi_source.query_points_of_interest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_radius(self, poi_source, origin):
        locator = GeoResourceLocator(poi_source)
        with pytest.raises(InvalidArgument, match="radius"):
            await locator.find_nearby(origin, "police", "-1")

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self, poi_source, origin):
        poi_source.query_points_of_interest.side_effect = UpstreamUnavailable("timeout")
        locator = GeoResourceLocator(poi_source)

        with pytest.raises(UpstreamUnavailable):
            await locator.find_nearby(origin)


class TestLocatorResourceCounter:
    """탐색 결과 개수 카운터 테스트"""

    @pytest.mark.asyncio
    async def test_counts_ranked_results(self, poi_source, origin, make_candidate):
        poi_source.query_points_of_interest.return_value = [
            make_candidate(1, 0.01, 0.0),
            make_candidate(2, 0.2, 0.0),  # 반경 밖
            make_candidate(3, 0.0, 0.01),
        ]
        counter = LocatorResourceCounter(GeoResourceLocator(poi_source))

        assert await counter.count(origin, "police", 5000) == 2
