"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from imgsrc_client.adapters.http_transport import Transport, TransportResponse
from imgsrc_client.config import Settings
from imgsrc_client.domain.errors import TransportError
from imgsrc_client.domain.models import Credentials
from imgsrc_client.services.gateway import ApiGateway
from imgsrc_client.services.session import ImgsrcSession
from imgsrc_client.services.uploads import UploadService


def info_xml(
    *,
    status: str | None = "OK",
    error: str | None = None,
    store: str | None = "3",
    albums: str = "",
    extra: str = "",
    proto: str = "0.8",
) -> bytes:
    """Build an `info` envelope for fake responses."""
    parts = [f'<info proto="{proto}">']
    if status is not None:
        parts.append(f"<status>{status}</status>")
    if error is not None:
        parts.append(f"<error>{error}</error>")
    if store is not None:
        parts.append(f"<store>{store}</store>")
    if albums:
        parts.append(f"<albums>{albums}</albums>")
    parts.append(extra)
    parts.append("</info>")
    return "".join(parts).encode("utf-8")


def album_xml(album_id: str, name: str, photos: int = 0) -> str:
    return (
        f'<album id="{album_id}"><name>{name}</name><photos>{photos}</photos>'
        "<modified>2011-05-01</modified></album>"
    )


def uploads_xml(*photo_ids: str) -> bytes:
    photos = "".join(
        f'<photo id="{pid}"><page>http://imgsrc.ru/p/{pid}.html</page>'
        f"<small>http://s.imgsrc.ru/{pid}.jpg</small>"
        f"<big>http://b.imgsrc.ru/{pid}.jpg</big></photo>"
        for pid in photo_ids
    )
    return info_xml(store=None, extra=f"<uploads>{photos}</uploads>")


@dataclass
class FakeTransport(Transport):
    """Transport returning scripted responses and recording calls."""

    host: str = "imgsrc.ru"
    responses: list[TransportResponse | Exception] = field(default_factory=list)
    calls: list[tuple[str, str, str, bytes | None]] = field(default_factory=list)
    closed: bool = False

    def queue(self, body: bytes, status_code: int = 200) -> None:
        self.responses.append(TransportResponse(status_code, body))

    def fail(self, message: str = "connection reset") -> None:
        self.responses.append(TransportError(message))

    def get(self, path: str, query: str = "") -> TransportResponse:
        self.calls.append(("GET", path, query, None))
        return self._next()

    def post(
        self, path: str, query: str, body: bytes, content_type: str
    ) -> TransportResponse:
        self.calls.append(("POST", path, query, body))
        return self._next()

    def close(self) -> None:
        self.closed = True

    def _next(self) -> TransportResponse:
        if not self.responses:
            raise AssertionError(f"unexpected request to {self.host}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class FakeTransportFactory:
    """Creates fake storage transports and remembers them."""

    created: list[FakeTransport] = field(default_factory=list)

    def __call__(self, host: str) -> FakeTransport:
        transport = FakeTransport(host=host)
        self.created.append(transport)
        return transport


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        username="vasya", password_md5="5f4dcc3b5aa765d61d8327deb882cf99"
    )


@pytest.fixture
def root_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def transport_factory() -> FakeTransportFactory:
    return FakeTransportFactory()


@pytest.fixture
def session(
    root_transport: FakeTransport,
    transport_factory: FakeTransportFactory,
    credentials: Credentials,
) -> ImgsrcSession:
    return ImgsrcSession(
        gateway=ApiGateway(root_transport),
        credentials=credentials,
        transport_factory=transport_factory,
        upload_service=UploadService(max_attempts=3),
    )


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.delenv("IMGSRC_PASSWORD", raising=False)
    monkeypatch.delenv("IMGSRC_PASSWORD_MD5", raising=False)
    return Settings(
        imgsrc_login="vasya",
        imgsrc_password_md5="5f4dcc3b5aa765d61d8327deb882cf99",
        _env_file=None,
    )
