from fastapi import APIRouter, Depends

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.api.deps import get_orchestrator
from whatcard.domain.errors import InputValidationError
from whatcard.domain.models import Benefit, Offer
from whatcard.ledger import wallet
from whatcard.schemas.requests import AnnualFeeRequest, BenefitBalanceRequest

router = APIRouter(tags=["wallet"])


def _check_path_id(path_id: str, body_id: str) -> None:
    if path_id != body_id:
        raise InputValidationError(f"Path id {path_id!r} does not match body id {body_id!r}")


@router.post("/users/{user_id}/offers", status_code=201)
def add_offer(user_id: str, offer: Offer, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.edit(user_id, wallet.add_offer, offer).to_json_dict()


@router.put("/users/{user_id}/offers/{offer_id}")
def update_offer(
    user_id: str,
    offer_id: str,
    offer: Offer,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    _check_path_id(offer_id, offer.id)
    return orchestrator.edit(user_id, wallet.update_offer, offer).to_json_dict()


@router.delete("/users/{user_id}/offers/{offer_id}")
def delete_offer(user_id: str, offer_id: str, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.edit(user_id, wallet.delete_offer, offer_id).to_json_dict()


@router.post("/users/{user_id}/offers/{offer_id}/used")
def mark_offer_used(user_id: str, offer_id: str, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.edit(user_id, wallet.mark_offer_used, offer_id).to_json_dict()


@router.post("/users/{user_id}/cards/{card_id}/benefits", status_code=201)
def add_benefit(
    user_id: str,
    card_id: str,
    benefit: Benefit,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.edit(user_id, wallet.add_benefit, card_id, benefit).to_json_dict()


@router.put("/users/{user_id}/cards/{card_id}/benefits/{benefit_id}")
def update_benefit(
    user_id: str,
    card_id: str,
    benefit_id: str,
    benefit: Benefit,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    _check_path_id(benefit_id, benefit.id)
    return orchestrator.edit(user_id, wallet.update_benefit, card_id, benefit).to_json_dict()


@router.delete("/users/{user_id}/cards/{card_id}/benefits/{benefit_id}")
def delete_benefit(
    user_id: str,
    card_id: str,
    benefit_id: str,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.edit(user_id, wallet.delete_benefit, card_id, benefit_id).to_json_dict()


@router.put("/users/{user_id}/benefits/{benefit_id}/balance")
def set_benefit_balance(
    user_id: str,
    benefit_id: str,
    request: BenefitBalanceRequest,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.edit(user_id, wallet.set_benefit_balance, benefit_id, request.amount).to_json_dict()


@router.put("/users/{user_id}/cards/{card_id}/annual-fee")
def update_annual_fee(
    user_id: str,
    card_id: str,
    request: AnnualFeeRequest,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.edit(
        user_id,
        wallet.update_annual_fee,
        card_id,
        balance=request.balance,
        paid_on=request.paid_on,
        total_fee=request.total_fee,
    ).to_json_dict()


@router.post("/users/{user_id}/cards/{card_id}/toggle")
def toggle_active_card(user_id: str, card_id: str, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.edit(user_id, wallet.toggle_active_card, card_id).to_json_dict()
