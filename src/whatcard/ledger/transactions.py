"""Record and undo the effect of paying with a recommended card.

Both operations take a wallet snapshot and return a new one; the input
snapshot is never modified. Reversal restores balances from the values
stored on the transaction record, never from a fresh valuation.
"""
import logging
import math
import uuid
import warnings
from collections.abc import Iterable
from datetime import datetime, timezone

from whatcard.domain.errors import StateInconsistencyWarning, TransactionNotFoundError
from whatcard.domain.models import Card, OffsetDetail, RankedResult, TransactionRecord, WalletState
from whatcard.domain.values import parse_amount

logger = logging.getLogger(__name__)

DEFAULT_MERCHANT_NAME = "Purchase"


def new_transaction_id() -> str:
    return f"tx-{uuid.uuid4().hex}"


def apply_transaction(
    state: WalletState,
    result: RankedResult,
    merchant: str,
    amount: object,
    now: datetime | None = None,
) -> WalletState:
    state = state.model_copy(deep=True)
    card = result.card
    breakdown = result.breakdown

    # points never offset the annual fee
    cash_incentive = breakdown.benefits_value + breakdown.offers_value
    state.annual_fee_balances[card.id] = state.current_fee_balance(card) - cash_incentive

    offset_details: list[OffsetDetail] = []
    for usage in breakdown.benefit_details:
        benefit = card.find_benefit(usage.benefit_id)
        current = state.benefit_balances.get(usage.benefit_id, 0.0)
        remaining = max(0.0, current - max(0.0, usage.used_amount))
        if benefit is not None:
            remaining = min(remaining, benefit.amount)
        state.benefit_balances[usage.benefit_id] = remaining

        if benefit is None:
            logger.warning("Benefit %s is not on card %s; no perk detail recorded", usage.benefit_id, card.id)
            continue
        offset_details.append(
            OffsetDetail(
                name=benefit.name,
                type="perk",
                value=usage.used_amount,
                benefit_id=benefit.id,
                benefit_cap=benefit.amount,
            )
        )

    used_offer_ids = set(breakdown.matched_offer_ids)
    for offer in state.active_offers:
        if offer.id in used_offer_ids:
            offer.is_used = True

    for usage in breakdown.offer_details:
        offset_details.append(
            OffsetDetail(name=usage.offer_name, type="offer", value=usage.used_amount, offer_id=usage.offer_id)
        )

    record = TransactionRecord(
        id=new_transaction_id(),
        card_id=card.id,
        merchant_name=merchant or DEFAULT_MERCHANT_NAME,
        date=now or datetime.now(timezone.utc),
        amount=parse_amount(amount),
        fee_offset=cash_incentive,
        offset_details=offset_details,
    )
    state.transaction_history.insert(0, record)

    logger.info(
        "Applied %s on card %s: fee offset %.2f, %d perk(s), %d offer(s)",
        record.id,
        card.id,
        cash_incentive,
        len(breakdown.benefit_details),
        len(used_offer_ids),
    )
    return state


def _catalog_cap(catalog: Iterable[Card], card_id: str, benefit_id: str) -> float:
    card = next((c for c in catalog if c.id == card_id), None)
    benefit = card.find_benefit(benefit_id) if card else None
    return benefit.amount if benefit else math.inf


def reverse_transaction(state: WalletState, transaction_id: str, catalog: Iterable[Card]) -> WalletState:
    """Undo a recorded transaction.

    Perk caps come from the static card catalog, not from the user's edited
    card list; a perk whose benefit is not in the catalog (user-added, or
    since removed) is restored without a cap. Offers deleted since the
    purchase are skipped.
    """
    catalog = list(catalog)
    state = state.model_copy(deep=True)

    index = next((i for i, tx in enumerate(state.transaction_history) if tx.id == transaction_id), None)
    if index is None:
        raise TransactionNotFoundError(transaction_id)
    record = state.transaction_history[index]

    for detail in record.offset_details:
        if detail.type == "perk" and detail.benefit_id:
            cap = _catalog_cap(catalog, record.card_id, detail.benefit_id)
            if cap == math.inf:
                logger.debug("Benefit %s is not in the catalog; restoring without a cap", detail.benefit_id)
            elif detail.benefit_cap is not None and cap != detail.benefit_cap:
                message = (
                    f"Benefit {detail.benefit_id} cap changed from {detail.benefit_cap} to {cap} "
                    f"since transaction {record.id}"
                )
                logger.warning(message)
                warnings.warn(message, StateInconsistencyWarning, stacklevel=2)
            current = state.benefit_balances.get(detail.benefit_id, 0.0)
            state.benefit_balances[detail.benefit_id] = min(current + detail.value, cap)

        elif detail.type == "offer" and detail.offer_id:
            offer = state.find_offer(detail.offer_id)
            if offer is None:
                logger.warning("Offer %s no longer exists; skipping", detail.offer_id)
                continue
            offer.is_used = False

    state.annual_fee_balances[record.card_id] = state.annual_fee_balances.get(record.card_id, 0.0) + record.fee_offset
    del state.transaction_history[index]

    logger.info("Reversed %s on card %s: fee restored by %.2f", record.id, record.card_id, record.fee_offset)
    return state
