"""
Logging configuration and utilities for the index fund allocator.
"""
from .config import configure_logging, get_logger, get_pipeline_logger, log_stage_completed

__all__ = ["configure_logging", "get_logger", "get_pipeline_logger", "log_stage_completed"]
