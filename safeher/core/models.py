"""
Core domain models for SafeHer.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# 자원 유형 정의
ResourceType = Literal["police", "hospital", "pharmacy", "women-help", "all"]

# 요인 심각도 정의
FactorSeverity = Literal["good", "low", "medium", "high", "critical"]

# 안전 상태 등급
SafetyStatus = Literal["Safe", "Caution", "Moderate Risk", "High Risk"]

class Coordinate(BaseModel):
    """위경도 좌표 (불변 값 객체)"""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

class SOSLocation(Coordinate):
    """정확도가 포함된 SOS 위치"""
    accuracy: Optional[float] = Field(default=None, ge=0)

class ResourceCandidate(BaseModel):
    """외부 소스에서 받은 원시 POI"""
    id: str
    name: Optional[str] = None
    type: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    tags: Dict[str, str] = Field(default_factory=dict)

class RankedResource(BaseModel):
    """거리 계산이 완료된 POI"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    type: str
    lat: float
    lng: float
    distance_km: float
    address: str = ""
    phone: str = ""
    opening_hours: str = ""
    tags: Dict[str, str] = Field(default_factory=dict)

class ScoreFactor(BaseModel):
    """점수 산정 요인"""
    factor: str
    impact: int
    severity: FactorSeverity

class SafetyAssessment(BaseModel):
    """안전 평가 결과 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int = Field(ge=0, le=100)
    status: SafetyStatus
    factors: List[ScoreFactor] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    nearby_resources: Dict[str, int] = Field(default_factory=dict)
    degraded: bool = False

class SOSAlert(BaseModel):
    """SOS 경보 모델"""
    alert_id: str
    location: SOSLocation
    message: str
    timestamp: str

    def to_event(self) -> dict:
        """sos-triggered 이벤트 페이로드로 변환합니다."""
        return {
            "alertId": self.alert_id,
            "location": {
                "lat": self.location.lat,
                "lng": self.location.lng,
                "accuracy": self.location.accuracy,
            },
            "message": self.message,
            "timestamp": self.timestamp,
        }
