"""Command line front end."""

import argparse
import logging
from collections.abc import Sequence

from imgsrc_client.app_logging import configure_logging
from imgsrc_client.containers import AppContainer, build_container
from imgsrc_client.domain.errors import ImgsrcError
from imgsrc_client.domain.models import Album
from imgsrc_client.services.uploads import PartEncoding

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the `imgsrc` command."""
    parser = argparse.ArgumentParser(prog="imgsrc", description="iMGSRC.RU client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("albums", help="List albums of the logged-in user")
    commands.add_parser("categories", help="List album categories")

    create = commands.add_parser("create", help="Create an album")
    create.add_argument("name")
    _add_album_options(create)

    upload = commands.add_parser("upload", help="Upload files to an album")
    upload.add_argument("album")
    upload.add_argument("files", nargs="+")
    upload.add_argument(
        "--create", action="store_true", help="Create the album when it is missing"
    )
    upload.add_argument(
        "--base64", action="store_true", help="Send parts base64-encoded (unreliable)"
    )
    _add_album_options(upload)
    return parser


def _add_album_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--category", help="Category id for a new album")
    parser.add_argument("--passwd", help="Password protecting a new album")


def format_album(album: Album) -> str:
    """Render one album as a tab-separated line."""
    return f"{album.id}\t{album.name}\t{album.size} photos\t{album.modified or '-'}"


def run(args: argparse.Namespace, container: AppContainer) -> int:
    """Execute a parsed command against a container."""
    if args.command == "categories":
        categories = container.category_directory.categories()
        for category_id, category in sorted(categories.items()):
            print(f"{category_id}\t{category.parent_id or '-'}\t{category.name}")
        return 0

    session = container.session.login()
    if args.command == "albums":
        for album in session.albums:
            print(format_album(album))
    elif args.command == "create":
        session.create_album(args.name, category=args.category, passwd=args.passwd)
        print(format_album(session.get_album(args.name)))
    elif args.command == "upload":
        if args.base64:
            session.upload_service.encoding = PartEncoding.BASE64
        if args.create:
            session.get_or_create_album(
                args.album, category=args.category, passwd=args.passwd
            )
        photos = session.upload(args.album, args.files)
        for photo in photos:
            print(f"{photo.id}\t{photo.page}\t{photo.big}")
        print(format_album(session.get_album(args.album)))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the `imgsrc` console script."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        container = build_container()
    except ValueError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 1
    try:
        return run(args, container)
    except ImgsrcError as exc:
        _logger.error("%s", exc)
        return 1
    finally:
        container.close_resources()
