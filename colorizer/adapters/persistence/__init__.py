# colorizer/adapters/persistence/__init__.py
"""
Persistence Adapters.

This package implements the Repository ports defined in the Core Domain.
It handles the translation between Domain Entities and the underlying storage mechanism
(currently the local file system).

Components:
- FileSystemColorSettingsRepository: Concrete implementation of IColorSettingsRepository using JSON files.
- schema: the versioned document format shared by all storage backends.
"""

from .filesystem_repo import FileSystemColorSettingsRepository

__all__ = [
    "FileSystemColorSettingsRepository",
]
