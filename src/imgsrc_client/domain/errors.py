"""Error taxonomy for the iMGSRC client."""


class ImgsrcError(Exception):
    """Base class for all client errors."""


class TransportError(ImgsrcError):
    """HTTP request could not be completed."""


class ProtocolError(ImgsrcError):
    """Server response violates the API contract."""


class MalformedResponse(ProtocolError):
    """Response body is not a valid envelope."""

    def __init__(self, message: str, body: bytes = b"") -> None:
        super().__init__(message)
        self.body = body


class ProtocolMismatch(ProtocolError):
    """Server speaks an unsupported protocol version."""

    def __init__(self, version: str | None) -> None:
        super().__init__(f"Unsupported protocol version {version}")
        self.version = version


class LoginError(ImgsrcError):
    """Login was rejected."""


class AlreadyLoggedIn(LoginError):
    """Login attempted twice on the same session."""


class CreateError(ImgsrcError):
    """Album could not be created."""


class NotFoundError(ImgsrcError):
    """Album lookup by name failed."""


class NotLoggedIn(ImgsrcError):
    """Operation requires a bound storage host."""


class UploadError(ImgsrcError):
    """Upload failed after exhausting its attempts."""
