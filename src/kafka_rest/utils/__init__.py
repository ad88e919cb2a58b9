"""Utility exports shared across the proxy."""

from kafka_rest.utils.clock import MockTime, SystemTime, Time

__all__ = ["MockTime", "SystemTime", "Time"]
