"""Utility functions for the pipeline status resource."""

from .time import format_timestamp, now_timestamp, parse_duration

__all__ = ["format_timestamp", "now_timestamp", "parse_duration"]
