"""
Allocation reporting.

Writes symbol and share count pairs to standard output.
"""
from .stdout_report import StdoutReporter

__all__ = ["StdoutReporter"]
