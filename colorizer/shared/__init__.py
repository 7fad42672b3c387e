# colorizer/shared/__init__.py
"""
Shared utilities package.

This module contains cross-cutting concerns used by both the Core Domain
and Infrastructure Adapters, including:
- Configuration management
- Structured logging
- Tracing around settings I/O (Observability)
- Dependency Injection wiring
"""
