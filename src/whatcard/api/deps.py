from functools import lru_cache

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.config import settings
from whatcard.repository.catalog_store import CatalogStore
from whatcard.repository.state_store import InMemoryStateStore, JsonFileStateStore, StateStore


def build_state_store() -> StateStore:
    if settings.state_backend == "memory":
        return InMemoryStateStore()
    return JsonFileStateStore(settings.state_dir)


@lru_cache(maxsize=1)
def get_orchestrator() -> WalletOrchestrator:
    return WalletOrchestrator(
        CatalogStore(settings.card_catalog_file, settings.sample_offers_file),
        build_state_store(),
    )
