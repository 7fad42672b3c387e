# colorizer/core/__init__.py
"""
Core Domain Layer.

This package contains the color rule entities and the interfaces (Ports)
the infrastructure layer must implement:
- No dependencies on UI toolkits or on the expression language itself.
- No dependencies on infrastructure (FileSystem, settings directory).
"""
