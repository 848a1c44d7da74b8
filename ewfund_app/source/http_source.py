"""HTTP GET constituents table source."""

import socket
from http.client import HTTPException, IncompleteRead, RemoteDisconnected
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..errors import SourceUnavailableError, TransientSourceError
from .base import BaseRecordSource


class HttpRecordSource(BaseRecordSource):
    """Reads the constituents CSV with a single HTTP GET."""

    def __init__(self, url: str, timeout_seconds: float = 30, encoding: str = "utf-8"):
        super().__init__("http")
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.encoding = encoding

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise SourceUnavailableError(f"Invalid URL: {url}: {e}", source=url) from e
        if not parsed.scheme or not parsed.netloc:
            raise SourceUnavailableError(f"Invalid URL: {url}", source=url)

    @property
    def location(self) -> str:
        return self.url

    def fetch(self) -> str:
        """Download the table; 5xx and network errors are retryable."""
        req = Request(
            self.url,
            headers={
                'Accept': 'text/csv, text/plain, */*',
                'User-Agent': 'ewfund-app/0.1'
            },
            method='GET'
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()
                body = response.read()

        except HTTPError as e:
            error_msg = f"HTTP {e.code}: {e.reason}"
            if e.code >= 500:
                raise TransientSourceError(error_msg, source=self.url, status_code=e.code) from e
            raise SourceUnavailableError(error_msg, source=self.url, status_code=e.code) from e

        except (IncompleteRead, RemoteDisconnected) as e:
            raise TransientSourceError(f"Connection dropped: {e!r}", source=self.url) from e

        except (OSError, URLError, socket.timeout) as e:
            raise TransientSourceError(f"Network error: {str(e)}", source=self.url) from e

        except HTTPException as e:
            raise SourceUnavailableError(f"HTTP protocol error: {e!r}", source=self.url) from e

        if not 200 <= response_code < 300:
            error_msg = f"HTTP {response_code}"
            if response_code >= 500:
                raise TransientSourceError(error_msg, source=self.url, status_code=response_code)
            raise SourceUnavailableError(error_msg, source=self.url, status_code=response_code)

        try:
            return body.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise SourceUnavailableError(
                f"Response is not valid {self.encoding}: {str(e)}",
                source=self.url,
                status_code=response_code
            ) from e
