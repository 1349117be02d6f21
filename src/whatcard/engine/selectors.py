from collections.abc import Iterable, Mapping
from datetime import date

from whatcard.domain.models import (
    Card,
    Offer,
    OfferUsage,
    RankedResult,
    RecommendationBreakdown,
    WalletState,
)
from whatcard.engine.evaluator import calculate_card_value


def active_cards(state: WalletState) -> list[Card]:
    active_ids = set(state.active_card_ids)
    return [card for card in state.cards if card.id in active_ids]


def eligible_offers(offers: Iterable[Offer], active_card_ids: Iterable[str], today: date | None = None) -> list[Offer]:
    """Offers that may still pay out: unused, on an active card, not expired."""
    today = today or date.today()
    active_ids = set(active_card_ids)
    return [
        offer
        for offer in offers
        if not offer.is_used
        and offer.card_id in active_ids
        and (offer.expiration_date is None or offer.expiration_date >= today)
    ]


def calculate_best_cards(
    cards: Iterable[Card],
    offers: Iterable[Offer],
    merchant: str,
    amount: float,
    category: str,
    benefit_balances: Mapping[str, float],
    benefit_override: str = "",
    today: date | None = None,
) -> list[RankedResult]:
    offers = list(offers)
    results: list[RankedResult] = []

    for card in cards:
        valuation = calculate_card_value(
            amount, merchant, category, card, offers, benefit_balances, benefit_override, today
        )

        # offers value is shared evenly, not attributed per offer
        matched_count = len(valuation.matched_offer_ids)
        share = valuation.offers_value / matched_count if matched_count else 0.0
        offer_details = [
            OfferUsage(offer_id=offer_id, offer_name=offer_name, used_amount=share)
            for offer_id, offer_name in zip(valuation.matched_offer_ids, valuation.matched_offer_names)
        ]

        results.append(
            RankedResult(
                card=card,
                total_value=valuation.total_value,
                breakdown=RecommendationBreakdown(
                    points_value=valuation.points_value,
                    points_earned=valuation.points_earned,
                    benefits_value=valuation.benefits_value,
                    offers_value=valuation.offers_value,
                    matched_category=valuation.matched_category,
                    matched_benefit_names=valuation.matched_benefit_names,
                    matched_benefit_ids=valuation.matched_benefit_ids,
                    matched_offer_names=valuation.matched_offer_names,
                    matched_offer_ids=valuation.matched_offer_ids,
                    benefit_details=valuation.benefit_details,
                    offer_details=offer_details,
                ),
                reasoning=valuation.reasoning,
            )
        )

    # list.sort is stable, so equal totals keep the input card order
    results.sort(key=lambda item: item.total_value, reverse=True)
    return results
