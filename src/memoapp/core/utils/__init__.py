"""
Core utilities module.

Provides shared utility functions used across all layers.
"""

from memoapp.core.utils.time import utc_now

__all__ = ["utc_now"]
