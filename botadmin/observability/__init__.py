"""Observability: structured logging, metrics and request context.

Provides standardized observability primitives using structlog for logging
and Prometheus for metrics.
"""
