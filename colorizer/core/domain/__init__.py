# colorizer/core/domain/__init__.py
"""
Domain Entities and Value Objects.

This package defines the core data structures used throughout the application
(Color, ColorRule, rule sets and change events). They are devoid of any
infrastructure logic.
"""
