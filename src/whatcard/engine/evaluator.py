from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from whatcard.domain.models import (
    Benefit,
    BenefitUsage,
    Card,
    CardValuation,
    Currency,
    Offer,
)
from whatcard.engine.categories import is_category_match

POINT_VALUES: dict[str, float] = {
    "MR": 0.02,
    "UR": 0.0205,
    # 1.5x on a cashback card is 1.5% back
    "USD": 0.01,
}
DEFAULT_POINT_VALUE = 0.01

OTHER_CATEGORY = "Other"
TRAVEL_CATEGORIES = frozenset({"travel", "flights", "hotels"})


@dataclass
class _PerkPass:
    value: float = 0.0
    covered_amount: float = 0.0
    ids: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    details: list[BenefitUsage] = field(default_factory=list)


@dataclass
class _OfferPass:
    value: float = 0.0
    ids: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)


def _benefit_matches(benefit: Benefit, merchant: str, category: str, benefit_override: str) -> bool:
    if benefit_override:
        return benefit.name == benefit_override

    if any(keyword.lower() in merchant for keyword in benefit.merchant_filter):
        return True
    return "Travel" in benefit.name and category in TRAVEL_CATEGORIES


def _perk_pass(
    card: Card,
    amount: float,
    merchant: str,
    category: str,
    benefit_balances: Mapping[str, float],
    benefit_override: str,
    today: date,
) -> _PerkPass:
    perks = _PerkPass()
    for benefit in card.benefits:
        if benefit.expiration_date and benefit.expiration_date < today:
            continue
        remaining = benefit_balances.get(benefit.id, 0.0)
        if remaining <= 0:
            continue
        if not _benefit_matches(benefit, merchant, category, benefit_override):
            continue

        # every matched perk is measured against the full purchase, so perks stack
        applied = min(amount, remaining)
        perks.value += applied
        if benefit.type == "credit":
            perks.covered_amount += applied
        perks.ids.append(benefit.id)
        perks.names.append(benefit.name)
        perks.details.append(BenefitUsage(benefit_id=benefit.id, used_amount=applied))

    perks.covered_amount = min(perks.covered_amount, amount)
    return perks


def _best_multiplier(card: Card, category: str, merchant: str) -> tuple[float, Currency, str]:
    base = next((c for c in card.base_bonus_categories if c.name == OTHER_CATEGORY), None)
    if base is not None:
        multiplier, currency = base.multiplier, base.currency
    else:
        multiplier, currency = 1.0, ("MR" if card.issuer == "Amex" else "UR")
    matched = OTHER_CATEGORY

    for bonus in card.base_bonus_categories:
        if bonus.name == OTHER_CATEGORY:
            continue
        if is_category_match(category, bonus.name, merchant) and bonus.multiplier > multiplier:
            multiplier, currency, matched = bonus.multiplier, bonus.currency, bonus.name
    return multiplier, currency, matched


def offer_reward(offer: Offer, amount: float) -> float | None:
    """Reward paid by an offer for this amount, or None when the offer does not apply."""
    if offer.offer_type == "spend_X_get_Y":
        if amount >= (offer.min_spend or 0):
            return offer.fixed_reward or 0.0
        return None

    reward = amount * ((offer.percent_back or 0) / 100)
    if offer.max_reward and reward > offer.max_reward:
        reward = offer.max_reward
    return reward


def _offer_pass(card: Card, amount: float, merchant: str, active_offers: Iterable[Offer]) -> _OfferPass:
    offers = _OfferPass()
    for offer in active_offers:
        if offer.card_id != card.id:
            continue
        if offer.merchant_name.lower() not in merchant:
            continue
        reward = offer_reward(offer, amount)
        if reward is None:
            continue
        offers.value += reward
        offers.ids.append(offer.id)
        offers.names.append(offer.merchant_name)
    return offers


def calculate_card_value(
    amount: float,
    merchant: str,
    category: str,
    card: Card,
    active_offers: Iterable[Offer],
    benefit_balances: Mapping[str, float],
    benefit_override: str = "",
    today: date | None = None,
) -> CardValuation:
    amount = max(0.0, amount)
    merchant_normalized = (merchant or "").lower()
    category_normalized = (category or "").lower()
    today = today or date.today()

    perks = _perk_pass(
        card, amount, merchant_normalized, category_normalized, benefit_balances, benefit_override, today
    )

    taxable_amount = max(0.0, amount - perks.covered_amount)
    multiplier, currency, matched_category = _best_multiplier(card, category_normalized, merchant_normalized)
    points_earned = taxable_amount * multiplier
    points_value = points_earned * POINT_VALUES.get(currency, DEFAULT_POINT_VALUE)

    offers = _offer_pass(card, amount, merchant_normalized, active_offers)

    total_value = points_value + perks.value + offers.value
    reasoning = (
        f"{multiplier:g}x {currency} ({matched_category}) on {taxable_amount:.2f} = {points_value:.2f}, "
        f"perks={perks.value:.2f}, offers={offers.value:.2f}, total={total_value:.2f}"
    )

    return CardValuation(
        card_id=card.id,
        total_value=total_value,
        points_value=points_value,
        benefits_value=perks.value,
        offers_value=offers.value,
        points_earned=points_earned,
        multiplier=multiplier,
        currency=currency,
        matched_category=matched_category,
        matched_benefit_ids=perks.ids,
        matched_benefit_names=perks.names,
        matched_offer_ids=offers.ids,
        matched_offer_names=offers.names,
        benefit_details=perks.details,
        reasoning=reasoning,
    )
