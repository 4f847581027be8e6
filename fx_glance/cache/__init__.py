"""Helpers for the on-disk rates cache."""

from __future__ import annotations

from fx_glance.cache.snapshot_cache import SnapshotCache

__all__ = ["SnapshotCache"]
