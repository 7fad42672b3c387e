# tests/__init__.py
"""
Test Suite for the Rule Colorizer.

Organization:
- `core`: Domain models and events.
- `services`: The RuleColorizer engine with a fake compiler and mocked storage.
- `adapters`: The filesystem repository and on-disk schema against a temp directory.
- `shared`: Configuration, logging and container wiring.
"""
