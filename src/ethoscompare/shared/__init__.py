"""ethoscompare Shared Module.

This package contains shared constants, error handling and logging helpers.
"""

__all__ = ["constants", "errors", "logging"]
