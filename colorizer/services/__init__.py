# colorizer/services/__init__.py
"""
Stateful application services.

- RuleColorizer: owns the rule store and answers color lookups for views.
"""

from .rule_colorizer import RuleColorizer

__all__ = [
    "RuleColorizer",
]
