"""Authenticated session: login, album directory and uploads."""

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from imgsrc_client.adapters.http_transport import Transport
from imgsrc_client.domain.errors import (
    AlreadyLoggedIn,
    CreateError,
    LoginError,
    NotFoundError,
    NotLoggedIn,
    ProtocolError,
    ProtocolMismatch,
)
from imgsrc_client.domain.models import Album, Credentials, Photo, SessionState
from imgsrc_client.services.envelope import Envelope, parse_albums, validate_envelope
from imgsrc_client.services.gateway import ApiGateway, encode_legacy_text, format_query
from imgsrc_client.services.uploads import UploadService

INFO_METHOD = "cli/info.php"

_logger = logging.getLogger(__name__)


@dataclass
class ImgsrcSession:
    """One user's session against the service.

    Login and album creation both answer with the complete album list and the
    storage shard to upload to; each successful answer replaces the album list
    and (re)binds the storage transport.
    """

    gateway: ApiGateway
    credentials: Credentials
    transport_factory: Callable[[str], Transport]
    upload_service: UploadService = field(default_factory=UploadService)
    state: SessionState = field(init=False)
    _storage_transport: Transport | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.state = SessionState(credentials=self.credentials)

    @property
    def albums(self) -> list[Album]:
        """Albums known from the most recent server answer."""
        return self.state.albums

    @property
    def storage_host(self) -> str | None:
        """Storage host uploads are sent to, once bound."""
        return self.state.storage_host

    def login(self) -> "ImgsrcSession":
        """Log in and load the user's albums."""
        if self.state.storage_host:
            raise AlreadyLoggedIn("already logged in")
        body = self.gateway.call_get(INFO_METHOD, self.credentials.query_params())
        try:
            envelope = validate_envelope(body)
        except ProtocolMismatch as exc:
            raise LoginError(str(exc)) from exc
        if not envelope.status_ok:
            raise LoginError(envelope.failure_message)
        self._apply_info(envelope)
        _logger.info(
            "Logged in as %s: %s albums on %s",
            self.credentials.username,
            len(self.state.albums),
            self.state.storage_host,
        )
        return self

    def create_album(
        self, name: str, category: str | None = None, passwd: str | None = None
    ) -> None:
        """Create a new album; the album list is reloaded from the reply."""
        existing = self._find_album(name)
        if existing is not None:
            raise CreateError(
                f"Album {name} already exists: {existing.size} photos, "
                f"modified {existing.modified}"
            )
        try:
            encoded_name = encode_legacy_text(name)
        except UnicodeEncodeError as exc:
            raise CreateError(f"Album name {name!r} cannot be encoded") from exc

        params: dict[str, object] = dict(self.credentials.query_params())
        params["create"] = encoded_name
        if category:
            params["create_category"] = category
        if passwd:
            params["create_passwd"] = passwd

        envelope = validate_envelope(self.gateway.call_get(INFO_METHOD, params))
        if not envelope.status_ok:
            raise CreateError(envelope.failure_message)
        self._apply_info(envelope)
        _logger.info("Created album %s", name)

    def get_album(self, name: str) -> Album:
        """Return the album with exactly this name."""
        album = self._find_album(name)
        if album is None:
            raise NotFoundError(f"no album {name}")
        return album

    def get_or_create_album(
        self, name: str, category: str | None = None, passwd: str | None = None
    ) -> Album:
        """Return an existing album, creating it first when missing."""
        album = self._find_album(name)
        if album is not None:
            return album
        self.create_album(name, category=category, passwd=passwd)
        # The reply lists all albums, so the new one is found by name.
        return self.get_album(name)

    def upload(self, album_name: str, files: Sequence[str | Path]) -> list[Photo]:
        """Upload files to an album one by one and return the new photos."""
        transport = self._storage_transport
        if transport is None:
            raise NotLoggedIn("user is not logged in (no storage host)")
        album = self.get_album(album_name)
        params: dict[str, object] = dict(self.credentials.query_params())
        params["album_id"] = album.id
        query = format_query(params)

        uploaded: list[Photo] = []
        for file in files:
            _logger.info("Uploading %s to %s", os.path.basename(file), album.name)
            photos = self.upload_service.upload_file(transport, query, file)
            album.add_photos(photos)
            uploaded.extend(photos)
        return uploaded

    def close(self) -> None:
        """Release the storage transport."""
        if self._storage_transport is not None:
            self._storage_transport.close()
            self._storage_transport = None

    def _find_album(self, name: str) -> Album | None:
        for album in self.state.albums:
            if album.name == name:
                return album
        return None

    def _apply_info(self, envelope: Envelope) -> None:
        store = envelope.root.find("store")
        if store is None or not (store.text or "").strip():
            raise ProtocolError("No storage ID in server response")
        self._bind_storage(f"e{store.text.strip()}.{self.gateway.root_host}")
        self.state.albums = parse_albums(envelope.root)

    def _bind_storage(self, host: str) -> None:
        if self.state.storage_host == host:
            return
        previous = self._storage_transport
        self._storage_transport = self.transport_factory(host)
        self.state.storage_host = host
        if previous is not None:
            previous.close()
        _logger.info("Bound storage host %s", host)
