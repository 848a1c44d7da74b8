"""
Record sources for the constituents table.

A source returns the raw CSV text in one blocking read, either over HTTP or
from a local file.
"""
from .base import BaseRecordSource
from .factory import create_source
from .file_source import FileRecordSource
from .http_source import HttpRecordSource

__all__ = ["BaseRecordSource", "FileRecordSource", "HttpRecordSource", "create_source"]
