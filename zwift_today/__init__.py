"""Fetch today's cycling workout from intervals.icu for Zwift."""

__version__ = '1.0.0'
