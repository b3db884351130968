"""
Shared utilities for SafeHer (geo math, retry/backoff).
"""
