"""Album category reference data."""

from dataclasses import dataclass, field

from imgsrc_client.domain.models import Category
from imgsrc_client.services.envelope import parse_categories, validate_envelope
from imgsrc_client.services.gateway import ApiGateway

CATEGORIES_METHOD = "cli/cats.php"


@dataclass
class CategoryDirectory:
    """Category list fetched once and reused afterwards."""

    gateway: ApiGateway
    use_cache: bool = False
    _categories: dict[str, Category] | None = field(
        default=None, init=False, repr=False
    )

    def categories(self) -> dict[str, Category]:
        """Return categories keyed by id, loading them on first use."""
        if self._categories is None:
            body = self.gateway.call_get(
                CATEGORIES_METHOD, {}, use_cache=self.use_cache
            )
            envelope = validate_envelope(body, require_status=False)
            self._categories = parse_categories(envelope.root)
        return self._categories
