"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
    storage_cutoff,
    storage_now,
    to_storage_datetime,
)

__all__ = [
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
    "storage_cutoff",
    "storage_now",
    "to_storage_datetime",
]
