"""
Utility functions module.

Shared numeric helpers for the allocation stages.
"""
