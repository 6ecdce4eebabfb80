"""Snapshot storage layer.

This module assembles, serializes, and persists the aggregated
analytics snapshot consumed by the dashboard.
"""
