"""
FastAPI dependencies.

The catalogs are built once and shared read-only across requests. Tests
swap them through app.dependency_overrides.
"""

from .catalog import ProfileCatalog, WindowProfileCatalog, default_gate_catalog, default_window_catalog

_gate_catalog = default_gate_catalog()
_window_catalog = default_window_catalog()


def get_gate_catalog() -> ProfileCatalog:
    return _gate_catalog


def get_window_catalog() -> WindowProfileCatalog:
    return _window_catalog
