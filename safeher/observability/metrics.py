"""
Metrics definitions for SafeHer.

This module defines Prometheus metrics for monitoring
resource lookups, safety scoring and SOS broadcasts.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
nearby_queries = Counter(
    "nearby_queries_total",
    "Number of nearby resource lookups",
    ["type"]
)

upstream_failures = Counter(
    "upstream_failures_total",
    "Point-of-interest source failures (errors and timeouts)",
    ["reason"]
)

scores_computed = Counter(
    "safety_scores_total",
    "Number of safety assessments computed",
    ["status"]
)

scores_degraded = Counter(
    "safety_scores_degraded_total",
    "Assessments where a resource count fell back to zero"
)

sos_triggered = Counter(
    "sos_triggered_total",
    "Number of SOS alerts broadcast"
)

sos_broadcast_failures = Counter(
    "sos_broadcast_failures_total",
    "Number of SOS alerts that could not be published",
    ["backend"]
)

# 히스토그램 메트릭
overpass_seconds = Histogram(
    "overpass_query_duration_seconds",
    "Time spent waiting for the point-of-interest source",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 25.0]
)

safety_score = Histogram(
    "safety_score",
    "Distribution of computed safety scores",
    buckets=[20, 40, 60, 80, 100]
)

# 게이지 메트릭
ws_subscribers = Gauge(
    "sos_ws_subscribers",
    "Currently connected SOS subscribers"
)

uptime_seconds = Gauge(
    "uptime_seconds",
    "Service uptime in seconds"
)
