import json
from pathlib import Path

from pydantic import TypeAdapter

from whatcard.domain.models import Card, Offer

_cards_adapter = TypeAdapter(list[Card])
_offers_adapter = TypeAdapter(list[Offer])


class CatalogStore:
    """Static card catalog and seed offers, read from JSON files."""

    def __init__(self, catalog_file: str, offers_file: str | None = None):
        self.catalog_file = Path(catalog_file)
        self.offers_file = Path(offers_file) if offers_file else None

    @staticmethod
    def _read(path: Path):
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def load_cards(self) -> list[Card]:
        return _cards_adapter.validate_python(self._read(self.catalog_file))

    def load_sample_offers(self) -> list[Offer]:
        if self.offers_file is None:
            return []
        return _offers_adapter.validate_python(self._read(self.offers_file))
