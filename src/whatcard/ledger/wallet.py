import logging
from datetime import date

from whatcard.domain.errors import BenefitNotFoundError, CardNotFoundError, OfferNotFoundError
from whatcard.domain.models import Benefit, Card, Offer, WalletState

logger = logging.getLogger(__name__)


def _require_card(state: WalletState, card_id: str) -> Card:
    card = state.find_card(card_id)
    if card is None:
        raise CardNotFoundError(card_id)
    return card


def _require_offer(state: WalletState, offer_id: str) -> Offer:
    offer = state.find_offer(offer_id)
    if offer is None:
        raise OfferNotFoundError(offer_id)
    return offer


def _benefit_index(card: Card, benefit_id: str) -> int:
    for index, benefit in enumerate(card.benefits):
        if benefit.id == benefit_id:
            return index
    raise BenefitNotFoundError(benefit_id)


def mark_offer_used(state: WalletState, offer_id: str) -> WalletState:
    state = state.model_copy(deep=True)
    _require_offer(state, offer_id).is_used = True
    return state


def add_offer(state: WalletState, offer: Offer) -> WalletState:
    state = state.model_copy(deep=True)
    _require_card(state, offer.card_id)
    state.active_offers.append(offer)
    return state


def update_offer(state: WalletState, offer: Offer) -> WalletState:
    state = state.model_copy(deep=True)
    _require_offer(state, offer.id)
    state.active_offers = [offer if o.id == offer.id else o for o in state.active_offers]
    return state


def delete_offer(state: WalletState, offer_id: str) -> WalletState:
    state = state.model_copy(deep=True)
    _require_offer(state, offer_id)
    state.active_offers = [o for o in state.active_offers if o.id != offer_id]
    return state


def add_benefit(state: WalletState, card_id: str, benefit: Benefit) -> WalletState:
    state = state.model_copy(deep=True)
    _require_card(state, card_id).benefits.append(benefit)
    state.benefit_balances[benefit.id] = benefit.amount
    return state


def update_benefit(state: WalletState, card_id: str, benefit: Benefit) -> WalletState:
    """Replace a benefit definition; its balance resets to the new maximum."""
    state = state.model_copy(deep=True)
    card = _require_card(state, card_id)
    card.benefits[_benefit_index(card, benefit.id)] = benefit
    state.benefit_balances[benefit.id] = benefit.amount
    return state


def delete_benefit(state: WalletState, card_id: str, benefit_id: str) -> WalletState:
    state = state.model_copy(deep=True)
    card = _require_card(state, card_id)
    del card.benefits[_benefit_index(card, benefit_id)]
    state.benefit_balances.pop(benefit_id, None)
    return state


def set_benefit_balance(state: WalletState, benefit_id: str, amount: float) -> WalletState:
    state = state.model_copy(deep=True)
    benefit = next(
        (b for card in state.cards for b in card.benefits if b.id == benefit_id),
        None,
    )
    if benefit is None:
        raise BenefitNotFoundError(benefit_id)
    state.benefit_balances[benefit_id] = min(max(0.0, amount), benefit.amount)
    return state


def update_annual_fee(state: WalletState, card_id: str, balance: float, paid_on: date, total_fee: float) -> WalletState:
    state = state.model_copy(deep=True)
    _require_card(state, card_id)
    state.annual_fee_balances[card_id] = balance
    state.annual_fee_dates[card_id] = paid_on
    state.custom_annual_fees[card_id] = total_fee
    logger.info("Annual fee for %s set to %.2f (balance %.2f, paid %s)", card_id, total_fee, balance, paid_on)
    return state


def toggle_active_card(state: WalletState, card_id: str) -> WalletState:
    state = state.model_copy(deep=True)
    _require_card(state, card_id)
    if card_id in state.active_card_ids:
        state.active_card_ids = [cid for cid in state.active_card_ids if cid != card_id]
    else:
        state.active_card_ids.append(card_id)
    return state
