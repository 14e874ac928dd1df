"""Utility functions for the backend."""

from concierge.utils.normalizers import normalize_name

__all__ = ["normalize_name"]
