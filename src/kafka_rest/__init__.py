"""
kafka-rest — simple-consumer REST proxy configuration.

File: src/kafka_rest/__init__.py

Purpose
- Package root. Typed configuration schema and resolution for a REST proxy
  fronting the legacy single-partition ("simple") consumer API.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
