"""
Input validation for SafeHer.

Pure helpers that turn raw request values (query strings, JSON
bodies) into validated domain models or raise InvalidArgument.
"""

import math
from typing import Any, Optional
from safeher.common.geo import validate_coordinates
from .errors import InvalidArgument
from .models import Coordinate, SOSLocation

def _parse_number(value: Any, field: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"{field} is required")
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} must be a number: {value!r}")
    if not math.isfinite(number):
        raise InvalidArgument(f"{field} must be finite: {value!r}")
    return number

def parse_coordinate(lat: Any, lng: Any) -> Coordinate:
    """
    원시 위경도 값을 Coordinate로 변환합니다.

    Args:
        lat: 위도 (숫자 또는 문자열)
        lng: 경도 (숫자 또는 문자열)

    Returns:
        검증된 Coordinate

    Raises:
        InvalidArgument: 값이 없거나 숫자가 아니거나 범위를 벗어난 경우
    """
    lat_f = _parse_number(lat, "lat")
    lng_f = _parse_number(lng, "lng")
    if not validate_coordinates(lat_f, lng_f):
        raise InvalidArgument(f"coordinate out of range: lat={lat_f} lng={lng_f}")
    return Coordinate(lat=lat_f, lng=lng_f)

def parse_radius(value: Any, default: int = 5000) -> int:
    """검색 반경(미터)을 검증합니다."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    number = _parse_number(value, "radius")
    if not number.is_integer():
        raise InvalidArgument(f"radius must be a whole number of metres: {value!r}")
    if number <= 0:
        raise InvalidArgument(f"radius must be positive: {value!r}")
    return int(number)

def parse_sos_location(raw: Any) -> SOSLocation:
    """SOS 요청의 location 객체를 검증합니다."""
    if isinstance(raw, SOSLocation):
        return raw
    if isinstance(raw, Coordinate):
        return SOSLocation(lat=raw.lat, lng=raw.lng)
    if not isinstance(raw, dict):
        raise InvalidArgument("location is required")

    coord = parse_coordinate(raw.get("lat"), raw.get("lng"))
    accuracy: Optional[float] = None
    if raw.get("accuracy") is not None:
        accuracy = _parse_number(raw["accuracy"], "accuracy")
        if accuracy < 0:
            raise InvalidArgument(f"accuracy must not be negative: {accuracy}")

    return SOSLocation(lat=coord.lat, lng=coord.lng, accuracy=accuracy)
