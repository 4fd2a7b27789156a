r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import retrykit


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(retrykit.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in retrykit.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in retrykit.__all__:
        assert hasattr(retrykit, name), f"{name} is in __all__ but not defined in module"
