"""Validation of the XML envelope wrapping every API response."""

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from imgsrc_client.domain.errors import MalformedResponse, ProtocolMismatch
from imgsrc_client.domain.models import Album, Category, Photo

PROTOCOL_VERSION = "0.8"


@dataclass(frozen=True)
class Envelope:
    """Parsed `info` envelope."""

    status_ok: bool
    error_message: str | None
    root: ET.Element

    @property
    def failure_message(self) -> str:
        """Server error text, or "unknown" when the server gave none."""
        return self.error_message or "unknown"


def validate_envelope(body: bytes, *, require_status: bool = True) -> Envelope:
    """Parse a response body and check protocol version and status."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise MalformedResponse(
            f"Invalid xml ({exc}):\r\n{_preview(body)}", body
        ) from exc
    if root.tag != "info":
        raise MalformedResponse(f"Invalid xml:\r\n{_preview(body)}", body)

    version = root.get("proto")
    if version != PROTOCOL_VERSION:
        raise ProtocolMismatch(version)

    status = root.find("status")
    if status is None and require_status:
        raise MalformedResponse(f"No status in response:\r\n{_preview(body)}", body)
    error = root.find("error")
    return Envelope(
        status_ok=status is not None and (status.text or "").strip() == "OK",
        error_message=error.text if error is not None else None,
        root=root,
    )


def child_text(node: ET.Element, tag: str, default: str | None = None) -> str | None:
    """Return the text of a child element, or the default if it is missing."""
    child = node.find(tag)
    if child is None:
        return default
    return child.text or ""


def parse_albums(root: ET.Element) -> list[Album]:
    """Build albums from `albums/album` nodes."""
    albums = []
    for node in root.findall("albums/album"):
        albums.append(
            Album(
                id=node.get("id", ""),
                name=child_text(node, "name", ""),
                size=_to_int(child_text(node, "photos")),
                modified=child_text(node, "modified"),
                password=child_text(node, "password"),
            )
        )
    return albums


def parse_photos(uploads: ET.Element) -> list[Photo]:
    """Build photos from the `photo` children of an `uploads` node."""
    return [
        Photo(
            id=node.get("id", ""),
            page=child_text(node, "page", ""),
            small=child_text(node, "small", ""),
            big=child_text(node, "big", ""),
        )
        for node in uploads.findall("photo")
    ]


def parse_categories(root: ET.Element) -> dict[str, Category]:
    """Build the category mapping from `categories/category` nodes."""
    categories: dict[str, Category] = {}
    for node in root.findall("categories/category"):
        category_id = node.get("id")
        if not category_id:
            continue
        categories[category_id] = Category(
            name=child_text(node, "name", ""),
            parent_id=child_text(node, "parent_id"),
        )
    return categories


def _to_int(value: str | None) -> int:
    try:
        return int(value or 0)
    except ValueError:
        return 0


def _preview(body: bytes, limit: int = 500) -> str:
    return body[:limit].decode("utf-8", errors="replace")
