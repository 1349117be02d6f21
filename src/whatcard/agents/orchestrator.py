import logging
import random
from collections.abc import Callable
from datetime import date

from whatcard.domain.errors import CardNotFoundError, StateNotFoundError
from whatcard.domain.models import RankedResult, WalletState
from whatcard.domain.values import parse_amount
from whatcard.engine.selectors import active_cards, calculate_best_cards, eligible_offers
from whatcard.ledger.transactions import apply_transaction, reverse_transaction
from whatcard.nlp.classifier import FALLBACK_CATEGORY, category_for_benefit, guess_category
from whatcard.repository.catalog_store import CatalogStore
from whatcard.repository.seed import generate_seed_state, merge_with_defaults
from whatcard.repository.state_store import StateStore
from whatcard.schemas.requests import RecommendRequest, UseCardRequest
from whatcard.schemas.responses import RecommendResponse

logger = logging.getLogger(__name__)


class WalletOrchestrator:
    """Runs each wallet operation as load snapshot -> compute -> save snapshot."""

    def __init__(self, catalog_store: CatalogStore, state_store: StateStore):
        self.catalog_store = catalog_store
        self.state_store = state_store

    def _resolve_category(self, request: RecommendRequest) -> str:
        if request.category:
            return request.category
        if request.benefit_override:
            return category_for_benefit(request.benefit_override)
        return guess_category(request.merchant) or FALLBACK_CATEGORY

    def load_state(self, user_id: str) -> WalletState:
        stored = self.state_store.load(user_id)
        if stored is None:
            raise StateNotFoundError(user_id)
        return merge_with_defaults(stored, self.catalog_store.load_cards())

    def save_state(self, user_id: str, state: WalletState) -> WalletState:
        self.state_store.save(user_id, state)
        return state

    def seed_state(self, user_id: str, rng: random.Random | None = None) -> WalletState:
        state = generate_seed_state(self.catalog_store.load_cards(), self.catalog_store.load_sample_offers(), rng)
        logger.info("Seeded wallet for %s with %d active card(s)", user_id, len(state.active_card_ids))
        return self.save_state(user_id, state)

    def rank_state(self, state: WalletState, request: RecommendRequest, today: date | None = None) -> list[RankedResult]:
        return calculate_best_cards(
            cards=active_cards(state),
            offers=eligible_offers(state.active_offers, state.active_card_ids, today),
            merchant=request.merchant,
            amount=parse_amount(request.amount),
            category=self._resolve_category(request),
            benefit_balances=state.benefit_balances,
            benefit_override=request.benefit_override,
            today=today,
        )

    def recommend(self, user_id: str, request: RecommendRequest) -> RecommendResponse:
        ranked = self.rank_state(self.load_state(user_id), request)
        return RecommendResponse(
            best_card=ranked[0] if ranked else None,
            ranked_cards=ranked,
            category=self._resolve_category(request),
        )

    def use_card(self, user_id: str, request: UseCardRequest) -> WalletState:
        state = self.load_state(user_id)
        ranked = self.rank_state(state, request)
        chosen = next((r for r in ranked if r.card.id == request.card_id), None)
        if chosen is None:
            raise CardNotFoundError(request.card_id)

        state = apply_transaction(state, chosen, request.merchant, request.amount)
        return self.save_state(user_id, state)

    def reverse_state(self, state: WalletState, transaction_id: str) -> WalletState:
        return reverse_transaction(state, transaction_id, self.catalog_store.load_cards())

    def delete_transaction(self, user_id: str, transaction_id: str) -> WalletState:
        state = self.reverse_state(self.load_state(user_id), transaction_id)
        return self.save_state(user_id, state)

    def edit(self, user_id: str, operation: Callable[..., WalletState], *args, **kwargs) -> WalletState:
        """Apply one of the whatcard.ledger.wallet operations to a stored wallet."""
        state = operation(self.load_state(user_id), *args, **kwargs)
        return self.save_state(user_id, state)
