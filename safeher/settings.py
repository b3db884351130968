# safeher/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class OverpassConfig(BaseModel):
    url: str = "https://overpass-api.de/api/interpreter"
    timeout_sec: int = 25
    user_agent: str = "safeher-core/0.1"

class LocatorConfig(BaseModel):
    default_radius_m: int = 5000
    max_results: int = 10

class ScoringConfig(BaseModel):
    resource_radius_m: int = 5000
    timezone: str | None = None               # None이면 서버 현지 시간

class MqttConfig(BaseModel):
    host: str = "localhost"
    port: int = 1883
    username: str | None = None
    password: str | None = None
    tls: bool = False
    client_id: str | None = None
    keepalive: int = 30
    topic_prefix: str = "safeher"
    lwt_topic: str = "safeher/state"
    connect_max_retries: int = 5
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 30.0

class BroadcastConfig(BaseModel):
    backend: str = "memory"                   # memory | mqtt
    subscriber_queue_size: int = 100

class Observability(BaseModel):
    http_host: str = "0.0.0.0"
    http_port: int = 5000
    metrics_enabled: bool = True
    service_name: str = "SafeHer"
    build_version: str = "0.1.0"
    build_date: str = "2026-10-01"
    log_level: str = "INFO"
    log_json: bool = False                   # True면 JSON 한 줄 로그

class Settings(BaseModel):
    overpass: OverpassConfig = Field(default_factory=OverpassConfig)
    locator: LocatorConfig = Field(default_factory=LocatorConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    broadcast: BroadcastConfig = Field(default_factory=BroadcastConfig)
    mqtt: MqttConfig = Field(default_factory=MqttConfig)
    observability: Observability = Field(default_factory=Observability)
