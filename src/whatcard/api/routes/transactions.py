from fastapi import APIRouter, Depends

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.api.deps import get_orchestrator
from whatcard.schemas.requests import UseCardRequest

router = APIRouter(tags=["transactions"])


@router.post("/users/{user_id}/transactions", status_code=201)
def use_card(
    user_id: str,
    request: UseCardRequest,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.use_card(user_id, request).to_json_dict()


@router.delete("/users/{user_id}/transactions/{transaction_id}")
def delete_transaction(
    user_id: str,
    transaction_id: str,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict:
    return orchestrator.delete_transaction(user_id, transaction_id).to_json_dict()
