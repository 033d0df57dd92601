"""
Data access module.

This package handles all HTTP access and record normalization.
"""

from .client import StasisClient, create_retry_session
from .loader import DataLoader
from .normalizer import RecordNormalizer

__all__ = ["StasisClient", "create_retry_session", "DataLoader", "RecordNormalizer"]
