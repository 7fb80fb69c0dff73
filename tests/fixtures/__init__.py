"""
Test fixtures for deterministic testing.

This module provides:
- snapshots: Person / WorkItem / RAID / Report builders and the pinned NOW
"""

from .snapshots import NOW, days_ago, make_item, make_person, make_report, make_risk

__all__ = ["NOW", "days_ago", "make_item", "make_person", "make_report", "make_risk"]
