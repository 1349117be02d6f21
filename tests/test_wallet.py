from datetime import date

import pytest

from whatcard.domain.errors import BenefitNotFoundError, CardNotFoundError, OfferNotFoundError
from whatcard.domain.models import Benefit, Offer, WalletState
from whatcard.ledger import wallet as ops


def test_mark_offer_used(wallet: WalletState) -> None:
    after = ops.mark_offer_used(wallet, "nike-10")

    assert after.find_offer("nike-10").is_used is True
    assert wallet.find_offer("nike-10").is_used is False

    with pytest.raises(OfferNotFoundError):
        ops.mark_offer_used(wallet, "missing")


def test_offer_lifecycle(wallet: WalletState) -> None:
    offer = Offer(id="hilton", card_id="uber-card", merchant_name="Hilton", offer_type="spend_X_get_Y", min_spend=250, fixed_reward=50)

    added = ops.add_offer(wallet, offer)
    updated = ops.update_offer(added, offer.model_copy(update={"fixed_reward": 75}))
    deleted = ops.delete_offer(updated, "hilton")

    assert added.find_offer("hilton").fixed_reward == 50
    assert updated.find_offer("hilton").fixed_reward == 75
    assert deleted.find_offer("hilton") is None

    with pytest.raises(CardNotFoundError):
        ops.add_offer(wallet, offer.model_copy(update={"card_id": "nope"}))


def test_benefit_lifecycle_keeps_balances_in_step(wallet: WalletState) -> None:
    perk = Benefit(id="saks", name="Saks Credit", merchant_filter=["saks"], amount=50, frequency="quarterly")

    added = ops.add_benefit(wallet, "uber-card", perk)
    assert added.benefit_balances["saks"] == 50

    updated = ops.update_benefit(added, "uber-card", perk.model_copy(update={"amount": 100}))
    assert updated.find_card("uber-card").find_benefit("saks").amount == 100
    assert updated.benefit_balances["saks"] == 100

    deleted = ops.delete_benefit(updated, "uber-card", "saks")
    assert deleted.find_card("uber-card").find_benefit("saks") is None
    assert "saks" not in deleted.benefit_balances

    with pytest.raises(BenefitNotFoundError):
        ops.delete_benefit(deleted, "uber-card", "saks")


def test_set_benefit_balance_is_clamped(wallet: WalletState) -> None:
    assert ops.set_benefit_balance(wallet, "uber", 80).benefit_balances["uber"] == 50
    assert ops.set_benefit_balance(wallet, "uber", -5).benefit_balances["uber"] == 0
    assert ops.set_benefit_balance(wallet, "uber", 12.5).benefit_balances["uber"] == 12.5

    with pytest.raises(BenefitNotFoundError):
        ops.set_benefit_balance(wallet, "nope", 1)


def test_update_annual_fee(wallet: WalletState) -> None:
    after = ops.update_annual_fee(wallet, "uber-card", balance=120, paid_on=date(2026, 3, 1), total_fee=300)

    assert after.annual_fee_balances["uber-card"] == 120
    assert after.annual_fee_dates["uber-card"] == date(2026, 3, 1)
    assert after.custom_annual_fees["uber-card"] == 300


def test_toggle_active_card(wallet: WalletState) -> None:
    off = ops.toggle_active_card(wallet, "uber-card")
    on = ops.toggle_active_card(off, "uber-card")

    assert off.active_card_ids == []
    assert on.active_card_ids == ["uber-card"]

    with pytest.raises(CardNotFoundError):
        ops.toggle_active_card(wallet, "nope")
