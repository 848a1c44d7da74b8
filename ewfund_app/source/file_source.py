"""Local file constituents table source."""

import sys
from pathlib import Path

from ..errors import SourceUnavailableError
from .base import BaseRecordSource


STDIN_PATH = "-"


class FileRecordSource(BaseRecordSource):
    """Reads the constituents CSV from a file, or stdin for "-"."""

    def __init__(self, path: str, encoding: str = "utf-8"):
        super().__init__("file")
        self.path = path
        self.encoding = encoding

    @property
    def location(self) -> str:
        return self.path

    def fetch(self) -> str:
        try:
            if self.path == STDIN_PATH:
                return sys.stdin.read()
            return Path(self.path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(
                f"Cannot read {self.path}: {str(e)}",
                source=self.path
            ) from e
