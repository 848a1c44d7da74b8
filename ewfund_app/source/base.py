"""Base class for constituents table sources."""

import time
from abc import ABC, abstractmethod

import structlog

from ..errors import RecoverableError, SourceUnavailableError


class BaseRecordSource(ABC):
    """Base class for record sources."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"source.{name}")
        self._fetch_count = 0
        self._error_count = 0

    @abstractmethod
    def fetch(self) -> str:
        """
        Read the complete constituents table.

        Returns:
            CSV document text

        Raises:
            SourceUnavailableError: If the table cannot be read
        """
        pass

    @property
    @abstractmethod
    def location(self) -> str:
        """URL or path the table is read from."""
        pass

    def fetch_with_retry(self, max_retries: int = 0, retry_delay: float = 1.0) -> str:
        """
        Fetch with a bounded number of fixed-delay retries.

        Only RecoverableError failures are retried; any other
        SourceUnavailableError is raised immediately.

        Args:
            max_retries: Extra attempts after the first one
            retry_delay: Delay between attempts in seconds

        Returns:
            CSV document text

        Raises:
            SourceUnavailableError: When the last attempt fails or the failure is permanent
        """
        attempt = 0

        while True:
            try:
                text = self.fetch()
                self._fetch_count += 1
                self.logger.info(
                    "Constituents table fetched",
                    source=self.location,
                    attempt=attempt + 1,
                    characters=len(text)
                )
                return text

            except SourceUnavailableError as e:
                self._error_count += 1
                if not isinstance(e, RecoverableError) or attempt >= max_retries:
                    self.logger.error(
                        "Constituents table unavailable",
                        source=self.location,
                        attempt=attempt + 1,
                        error=str(e)
                    )
                    raise

                attempt += 1
                e.retry_count = attempt
                e.max_retries = max_retries
                self.logger.warning(
                    f"Fetch attempt {attempt} failed, retrying in {retry_delay}s",
                    source=self.location,
                    error=str(e)
                )
                time.sleep(retry_delay)

    def get_stats(self) -> dict:
        """Get fetch statistics."""
        return {
            "name": self.name,
            "location": self.location,
            "fetch_count": self._fetch_count,
            "error_count": self._error_count,
        }
