"""Response cache used to keep raw API replies around for debugging."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    """Cache interface for raw API responses."""

    def load(self, method: str, params: Mapping[str, object]) -> bytes | None:
        """Return a stored response body, if present."""

    def store(self, method: str, params: Mapping[str, object], body: bytes) -> None:
        """Store a response body."""


@dataclass
class NullResponseCache(ResponseCache):
    """Cache that never stores anything."""

    def load(self, method: str, params: Mapping[str, object]) -> bytes | None:
        """Always miss."""
        return None

    def store(self, method: str, params: Mapping[str, object], body: bytes) -> None:
        """Discard the body."""


@dataclass
class DirectoryResponseCache(ResponseCache):
    """Writes every response to an XML file inside a directory."""

    directory: Path

    def path_for(self, method: str, params: Mapping[str, object]) -> Path:
        """Return the file used for a method and its parameters."""
        suffix = "".join(
            f"_{key}-{value}" for key, value in params.items() if "passw" not in key
        )
        return self.directory / f"{method.replace('/', '-')}{suffix}.xml"

    def load(self, method: str, params: Mapping[str, object]) -> bytes | None:
        """Return the cached body if the file exists."""
        path = self.path_for(method, params)
        if not path.is_file():
            return None
        _logger.debug("Using cached %s", path)
        return path.read_bytes()

    def store(self, method: str, params: Mapping[str, object], body: bytes) -> None:
        """Write the body; failures are logged and ignored."""
        path = self.path_for(method, params)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        except OSError as exc:
            _logger.warning("Could not cache response to %s: %s", path, exc)
