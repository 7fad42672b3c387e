# colorizer/core/ports/__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that the Infrastructure Adapters and the
host application must implement. They let the colorizer compile rules and
persist them without knowing the expression language or the storage medium.
"""

from .predicate_compiler import IPredicate, IPredicateCompiler
from .color_settings_repository import IColorSettingsRepository
from .colorizer import IColorizer

__all__ = [
    "IPredicate",
    "IPredicateCompiler",
    "IColorSettingsRepository",
    "IColorizer",
]
