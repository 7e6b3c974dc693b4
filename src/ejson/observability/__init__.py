"""Public observability primitives: structlog configuration for ejson."""

from ejson.observability.logging import configure_logging, get_logger, reset_logging

__all__ = ["configure_logging", "get_logger", "reset_logging"]
