"""Telemetry export ingestion.

This module fetches and parses raw CSV exports and drives the
snapshot generation pipeline.
"""
