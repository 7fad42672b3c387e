# colorizer/adapters/__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in `colorizer.core.ports`:
- `persistence`: Secondary Adapter (Driven) - Local file storage of color settings.

In Hexagonal Architecture, dependencies point INWARD. These modules depend on `colorizer.core`,
but `colorizer.core` never imports from here.
"""
