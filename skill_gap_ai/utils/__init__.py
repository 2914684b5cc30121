"""Utility exports."""

from .helpers import dedupe_entries, merge_taxonomies
from .logger import get_logger

__all__ = ["get_logger", "dedupe_entries", "merge_taxonomies"]
