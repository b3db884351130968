"""
Observability for SafeHer: loguru logging, Prometheus metrics,
and health/readiness HTTP endpoints.
"""
