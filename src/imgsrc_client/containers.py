"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from imgsrc_client.adapters.http_transport import HttpxTransport
from imgsrc_client.config import Settings, resolve_credentials
from imgsrc_client.services.cache import (
    DirectoryResponseCache,
    NullResponseCache,
    ResponseCache,
)
from imgsrc_client.services.categories import CategoryDirectory
from imgsrc_client.services.gateway import ApiGateway
from imgsrc_client.services.session import ImgsrcSession
from imgsrc_client.services.uploads import PartEncoding, UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gateway: ApiGateway
    category_directory: CategoryDirectory
    session: ImgsrcSession
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    credentials = resolve_credentials(resolved_settings)
    transport_factory = partial(
        HttpxTransport.create, timeout=resolved_settings.http_timeout_seconds
    )
    cache: ResponseCache = (
        DirectoryResponseCache(Path(resolved_settings.cache_dir))
        if resolved_settings.cache_responses
        else NullResponseCache()
    )
    gateway = ApiGateway(
        transport=transport_factory(resolved_settings.imgsrc_root_host),
        cache=cache,
    )
    category_directory = CategoryDirectory(
        gateway, use_cache=resolved_settings.cache_responses
    )
    upload_service = UploadService(
        max_attempts=resolved_settings.upload_max_attempts,
        retry_delay_seconds=resolved_settings.upload_retry_delay_seconds,
        encoding=(
            PartEncoding.BASE64
            if resolved_settings.upload_base64
            else PartEncoding.BINARY
        ),
    )
    session = ImgsrcSession(
        gateway=gateway,
        credentials=credentials,
        transport_factory=transport_factory,
        upload_service=upload_service,
    )

    def close_resources() -> None:
        session.close()
        gateway.close()

    return AppContainer(
        settings=resolved_settings,
        gateway=gateway,
        category_directory=category_directory,
        session=session,
        close_resources=close_resources,
    )
