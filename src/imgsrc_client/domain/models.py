"""Domain models for the iMGSRC photo hosting service."""

import hashlib
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Login name and MD5 password digest sent with every call."""

    username: str
    password_md5: str

    @classmethod
    def from_password(cls, username: str, password: str) -> "Credentials":
        """Build credentials from a plain-text password."""
        digest = hashlib.md5(password.encode("utf-8")).hexdigest()  # noqa: S324
        return cls(username=username, password_md5=digest)

    def query_params(self) -> dict[str, str]:
        """Return the authentication query parameters."""
        return {"login": self.username, "passwd": self.password_md5}


@dataclass(frozen=True)
class Photo:
    """Photo record returned by an upload."""

    id: str
    page: str
    small: str
    big: str


@dataclass
class Album:
    """Album owned by the logged-in user."""

    id: str
    name: str
    size: int = 0
    modified: str | None = None
    password: str | None = None
    photos: list[Photo] = field(default_factory=list)

    def add_photos(self, photos: list[Photo]) -> None:
        """Append freshly uploaded photos and bump the photo count."""
        self.photos.extend(photos)
        self.size += len(photos)


@dataclass(frozen=True)
class Category:
    """Album category reference data."""

    name: str
    parent_id: str | None


@dataclass
class SessionState:
    """Client-held state of one authenticated session."""

    credentials: Credentials
    storage_host: str | None = None
    albums: list[Album] = field(default_factory=list)
