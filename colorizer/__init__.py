# colorizer/__init__.py
"""
Rule Colorizer - rule-based coloring engine for structured log events.

This package follows Hexagonal Architecture (Ports & Adapters):
the engine and its data types live in the core, storage and expression
compilation are reached through ports.
"""

__version__ = "1.0.0"
