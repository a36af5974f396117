"""HTTP transport bound to a single iMGSRC host."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from imgsrc_client.domain.errors import TransportError


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of an HTTP response."""

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        """Return True for 2xx responses."""
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Interface for issuing requests against one host."""

    host: str

    def get(self, path: str, query: str = "") -> TransportResponse:
        """Issue a GET request and return the raw response."""

    def post(
        self, path: str, query: str, body: bytes, content_type: str
    ) -> TransportResponse:
        """Issue a POST request with a prepared body."""

    def close(self) -> None:
        """Release the underlying connection pool."""


@dataclass
class HttpxTransport(Transport):
    """Transport implemented with a blocking httpx client."""

    host: str
    http_client: httpx.Client
    timeout: float = 30.0

    @classmethod
    def create(cls, host: str, timeout: float = 30.0) -> "HttpxTransport":
        """Create a transport with a managed httpx session."""
        return cls(host=host, http_client=httpx.Client(), timeout=timeout)

    def get(self, path: str, query: str = "") -> TransportResponse:
        """Fetch a path; the query string is sent as given."""
        try:
            response = self.http_client.get(
                self._url(path, query), timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {path} on {self.host} failed: {exc}") from exc
        return TransportResponse(response.status_code, response.content)

    def post(
        self, path: str, query: str, body: bytes, content_type: str
    ) -> TransportResponse:
        """Post a raw body with an explicit content type."""
        try:
            response = self.http_client.post(
                self._url(path, query),
                content=body,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {path} on {self.host} failed: {exc}") from exc
        return TransportResponse(response.status_code, response.content)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()

    def _url(self, path: str, query: str) -> str:
        url = f"http://{self.host}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{query}"
        return url
