"""Photo upload: multipart body construction and per-file retry."""

import base64
import enum
import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from imgsrc_client.adapters.http_transport import Transport
from imgsrc_client.domain.errors import ImgsrcError, ProtocolError, UploadError
from imgsrc_client.domain.models import Photo
from imgsrc_client.services.envelope import parse_photos, validate_envelope

BOUNDARY = "x----------------------------Rai8cheth7thi6ee"
UPLOAD_METHOD = "cli/post.php"

_logger = logging.getLogger(__name__)


class PartEncoding(enum.Enum):
    """Transfer encoding of file parts."""

    BINARY = "binary"
    # Accepted by the protocol but unreliable server side.
    BASE64 = "base64"


@dataclass(frozen=True)
class MultipartBody:
    """Encoded multipart/form-data request body."""

    content: bytes
    content_type: str


def build_multipart_body(
    files: Sequence[str | Path],
    encoding: PartEncoding = PartEncoding.BINARY,
    boundary: str = BOUNDARY,
) -> MultipartBody:
    """Build a form-data body with one `u<n>` field per file.

    An empty path produces an empty part, which is how the endpoint is probed.

    Raises OSError when a file cannot be read.
    """
    chunks: list[bytes] = []
    for index, file in enumerate(files, start=1):
        filename = os.path.basename(file)
        data = Path(file).read_bytes() if str(file) else b""

        headers = [
            f"--{boundary}",
            f'Content-Disposition: form-data; name="u{index}"; filename="{filename}"',
            f"Content-Type: {'image/jpeg' if data else 'application/octet-stream'}",
        ]
        if encoding is PartEncoding.BASE64:
            headers.append("Content-Transfer-Encoding: base64")
            data = base64.encodebytes(data)
        else:
            headers.append(f"Content-Length: {len(data)}")

        chunks.append(("\r\n".join(headers) + "\r\n\r\n").encode("utf-8"))
        chunks.append(data)
        chunks.append(b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode("ascii"))
    return MultipartBody(
        content=b"".join(chunks),
        content_type=f"multipart/form-data; boundary={boundary}",
    )


def parse_upload_response(body: bytes) -> list[Photo]:
    """Validate an upload reply and return the photos it reports."""
    try:
        envelope = validate_envelope(body)
    except ProtocolError as exc:
        raise UploadError(str(exc)) from exc
    if not envelope.status_ok:
        raise UploadError(envelope.failure_message)
    uploads = envelope.root.find("uploads")
    if uploads is None:
        raise ProtocolError("No uploads in server response")
    return parse_photos(uploads)


@dataclass
class UploadService:
    """Uploads files one at a time with a bounded number of attempts."""

    max_attempts: int = 3
    retry_delay_seconds: float = 0.0
    encoding: PartEncoding = PartEncoding.BINARY

    def upload_file(
        self, transport: Transport, query: str, file: str | Path
    ) -> list[Photo]:
        """Upload a single file and return the photos the server created."""
        name = os.path.basename(file)
        try:
            body = build_multipart_body([file], encoding=self.encoding)
        except OSError as exc:
            raise UploadError(f"{name}: {exc}") from exc

        attempt = 0
        while True:
            try:
                return self._post(transport, query, body)
            except ImgsrcError as exc:
                attempt += 1
                _logger.warning(
                    "%s: upload failed (attempt %s/%s): %s",
                    name,
                    attempt,
                    self.max_attempts,
                    exc,
                )
                if attempt >= self.max_attempts:
                    raise UploadError(str(exc)) from exc
                if self.retry_delay_seconds:
                    time.sleep(self.retry_delay_seconds)

    @staticmethod
    def _post(transport: Transport, query: str, body: MultipartBody) -> list[Photo]:
        response = transport.post(
            UPLOAD_METHOD, query, body.content, body.content_type
        )
        if not response.ok:
            text = response.body.decode("utf-8", errors="replace")
            raise UploadError(f"Code {response.status_code}: {text}")
        return parse_upload_response(response.body)
