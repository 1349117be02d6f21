from pathlib import Path

import pytest

from whatcard.domain.models import Benefit, BonusCategory, Card, Offer, WalletState
from whatcard.repository.catalog_store import CatalogStore

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CATALOG_FILE = PROJECT_ROOT / "data" / "cards" / "catalog.json"
OFFERS_FILE = PROJECT_ROOT / "data" / "offers" / "sample_offers.json"


@pytest.fixture
def catalog_store() -> CatalogStore:
    return CatalogStore(str(CATALOG_FILE), str(OFFERS_FILE))


@pytest.fixture
def mr_travel_card() -> Card:
    return Card(
        id="mr-travel",
        name="MR Travel",
        issuer="Amex",
        annual_fee=250,
        base_bonus_categories=[
            BonusCategory(name="Other", multiplier=1, currency="MR"),
            BonusCategory(name="Travel", multiplier=3, currency="MR"),
        ],
    )


@pytest.fixture
def uber_card() -> Card:
    return Card(
        id="uber-card",
        name="Uber Card",
        issuer="Amex",
        annual_fee=250,
        base_bonus_categories=[
            BonusCategory(name="Other", multiplier=1, currency="MR"),
            BonusCategory(name="Dining", multiplier=4, currency="MR"),
        ],
        benefits=[Benefit(id="uber", name="Uber Cash", merchant_filter=["uber"], amount=50, frequency="monthly")],
    )


@pytest.fixture
def nike_offer() -> Offer:
    return Offer(
        id="nike-10",
        card_id="uber-card",
        merchant_name="Nike",
        offer_type="percent_back",
        percent_back=10,
        max_reward=15,
    )


@pytest.fixture
def wallet(uber_card: Card, nike_offer: Offer) -> WalletState:
    return WalletState(
        cards=[uber_card],
        active_card_ids=[uber_card.id],
        active_offers=[nike_offer],
        benefit_balances={"uber": 50},
        annual_fee_balances={uber_card.id: 250},
    )
