import random
from collections.abc import Sequence
from datetime import date, timedelta

from whatcard.domain.models import Card, Offer, WalletState


def _months_before(day: date, months: int) -> date:
    month_index = day.year * 12 + day.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    for candidate in (day.day, 30, 29, 28):
        try:
            return date(year, month, candidate)
        except ValueError:
            continue
    raise ValueError(f"Cannot shift {day} back {months} months")


def default_state(catalog: Sequence[Card], sample_offers: Sequence[Offer], today: date | None = None) -> WalletState:
    """All catalog cards active, every perk at its maximum, fees last paid two months ago."""
    today = today or date.today()
    fee_date = _months_before(today, 2)
    return WalletState(
        cards=[card.model_copy(deep=True) for card in catalog],
        active_card_ids=[card.id for card in catalog],
        active_offers=[offer.model_copy(deep=True) for offer in sample_offers],
        benefit_balances={b.id: b.amount for card in catalog for b in card.benefits},
        annual_fee_balances={card.id: card.annual_fee for card in catalog},
        annual_fee_dates={card.id: fee_date for card in catalog},
    )


def merge_with_defaults(stored: WalletState, catalog: Sequence[Card], today: date | None = None) -> WalletState:
    """Fill in balances and fee dates for catalog cards and perks the stored snapshot predates."""
    defaults = default_state(catalog, [], today)
    return stored.model_copy(
        update={
            "benefit_balances": {**defaults.benefit_balances, **stored.benefit_balances},
            "annual_fee_balances": {**defaults.annual_fee_balances, **stored.annual_fee_balances},
            "annual_fee_dates": {**defaults.annual_fee_dates, **stored.annual_fee_dates},
        },
        deep=True,
    )


def generate_seed_state(
    catalog: Sequence[Card],
    sample_offers: Sequence[Offer],
    rng: random.Random | None = None,
    today: date | None = None,
) -> WalletState:
    """Randomized starting wallet for a new user.

    Three to five cards are active (never more than the catalog holds) and
    two or three sample offers are handed out round-robin to the active
    cards, each with a fresh id and an expiration moved up to 30 days either
    way. History starts empty.
    """
    rng = rng or random.Random()
    today = today or date.today()
    base = default_state(catalog, sample_offers, today)

    card_ids = [card.id for card in catalog]
    rng.shuffle(card_ids)
    low = min(3, len(card_ids))
    active_card_ids = card_ids[: rng.randint(low, min(5, len(card_ids)))]

    offers: list[Offer] = []
    if active_card_ids and sample_offers:
        pool = list(sample_offers)
        rng.shuffle(pool)
        count = rng.randint(min(2, len(pool)), min(3, len(pool)))
        stamp = rng.getrandbits(32)
        for idx, offer in enumerate(pool[:count]):
            expiration = offer.expiration_date
            if expiration is not None:
                expiration = expiration + timedelta(days=rng.randint(-30, 30))
            offers.append(
                offer.model_copy(
                    update={
                        "id": f"{offer.id}-{stamp:08x}-{idx}",
                        "card_id": active_card_ids[idx % len(active_card_ids)],
                        "expiration_date": expiration,
                        "is_used": False,
                    }
                )
            )

    return base.model_copy(
        update={"active_card_ids": active_card_ids, "active_offers": offers, "transaction_history": []}
    )
