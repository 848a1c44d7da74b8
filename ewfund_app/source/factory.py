"""Source selection from configuration."""

from ..config.defaults import SourceParams
from .base import BaseRecordSource
from .file_source import FileRecordSource
from .http_source import HttpRecordSource


def create_source(params: SourceParams) -> BaseRecordSource:
    """Build the configured source; a file_path takes precedence over the url."""
    if params.file_path:
        return FileRecordSource(params.file_path, encoding=params.encoding)
    return HttpRecordSource(
        params.url,
        timeout_seconds=params.timeout_seconds,
        encoding=params.encoding,
    )
