# safeher/main.py
import os
from safeher.settings import Settings
from safeher.observability.logging_setup import setup_logging, get_logger
from safeher.observability.server import run_http_server

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # Overpass
    s.overpass.url = os.getenv("OVERPASS_URL", s.overpass.url)
    s.overpass.timeout_sec = int(os.getenv("OVERPASS_TIMEOUT_SEC", s.overpass.timeout_sec))
    s.overpass.user_agent = os.getenv("OVERPASS_USER_AGENT", s.overpass.user_agent)

    # 탐색/점수
    s.locator.default_radius_m = int(os.getenv("NEARBY_RADIUS_M", s.locator.default_radius_m))
    s.scoring.resource_radius_m = int(os.getenv("SCORE_RADIUS_M", s.scoring.resource_radius_m))
    s.scoring.timezone = os.getenv("SCORE_TIMEZONE", s.scoring.timezone) or None

    # 브로드캐스트
    s.broadcast.backend = os.getenv("BROADCAST_BACKEND", s.broadcast.backend)
    s.broadcast.subscriber_queue_size = int(os.getenv("SUBSCRIBER_QUEUE_SIZE", s.broadcast.subscriber_queue_size))

    # MQTT
    s.mqtt.host = os.getenv("MQTT_HOST", s.mqtt.host)
    s.mqtt.port = int(os.getenv("MQTT_PORT", s.mqtt.port))
    s.mqtt.username = os.getenv("MQTT_USERNAME", s.mqtt.username)
    s.mqtt.password = os.getenv("MQTT_PASSWORD", s.mqtt.password)
    s.mqtt.client_id = os.getenv("MQTT_CLIENT_ID", s.mqtt.client_id)
    s.mqtt.tls = _b("MQTT_TLS", s.mqtt.tls)
    s.mqtt.topic_prefix = os.getenv("MQTT_TOPIC_PREFIX", s.mqtt.topic_prefix)

    # 관측성
    s.observability.http_host = os.getenv("HTTP_HOST", s.observability.http_host)
    s.observability.http_port = int(os.getenv("HTTP_PORT", os.getenv("PORT", s.observability.http_port)))
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json_logs=s.observability.log_json)
    log = get_logger()
    log.info(f"설정 로드 완료 broadcast:{s.broadcast.backend} port:{s.observability.http_port}")

    run_http_server(s)

if __name__ == "__main__":
    main()
