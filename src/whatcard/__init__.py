from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.domain.errors import (
    InputValidationError,
    NotFoundError,
    StateInconsistencyWarning,
    TransactionNotFoundError,
)
from whatcard.domain.models import Benefit, BonusCategory, Card, Offer, RankedResult, TransactionRecord, WalletState
from whatcard.engine.evaluator import calculate_card_value
from whatcard.engine.selectors import calculate_best_cards, eligible_offers
from whatcard.ledger.transactions import apply_transaction, reverse_transaction
from whatcard.nlp.classifier import category_for_benefit, guess_category
from whatcard.repository.catalog_store import CatalogStore

__all__ = [
    "Benefit",
    "BonusCategory",
    "Card",
    "CatalogStore",
    "InputValidationError",
    "NotFoundError",
    "Offer",
    "RankedResult",
    "StateInconsistencyWarning",
    "TransactionNotFoundError",
    "TransactionRecord",
    "WalletOrchestrator",
    "WalletState",
    "apply_transaction",
    "calculate_best_cards",
    "calculate_card_value",
    "category_for_benefit",
    "eligible_offers",
    "guess_category",
    "reverse_transaction",
]
