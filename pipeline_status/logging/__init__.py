"""
Logging configuration and utilities for the pipeline status resource.
"""
from .config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
