"""Root API host access: query formatting, GET calls and response caching."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import quote

from imgsrc_client.adapters.http_transport import Transport
from imgsrc_client.services.cache import NullResponseCache, ResponseCache

LEGACY_ENCODING = "cp1251"

_logger = logging.getLogger(__name__)


def format_query(params: Mapping[str, object]) -> str:
    """Join parameters as key=value pairs without escaping."""
    return "&".join(f"{key}={value}" for key, value in params.items())


def encode_legacy_text(text: str) -> str:
    """Encode text as percent-escaped CP1251 bytes.

    Raises UnicodeEncodeError when the text has no CP1251 representation.
    """
    return quote(text.encode(LEGACY_ENCODING), safe="")


@dataclass
class ApiGateway:
    """Issues GET calls against the root API host."""

    transport: Transport
    cache: ResponseCache = field(default_factory=NullResponseCache)

    @property
    def root_host(self) -> str:
        """Host name the API is served from."""
        return self.transport.host

    def call_get(
        self, method: str, params: Mapping[str, object], *, use_cache: bool = False
    ) -> bytes:
        """Fetch an API method and return the raw body."""
        if use_cache:
            cached = self.cache.load(method, params)
            if cached is not None:
                return cached
        _logger.debug("GET %s", method)
        response = self.transport.get(method, format_query(params))
        if not response.ok:
            _logger.warning("GET %s returned HTTP %s", method, response.status_code)
        self.cache.store(method, params, response.body)
        return response.body

    def close(self) -> None:
        """Close the root host transport."""
        self.transport.close()
