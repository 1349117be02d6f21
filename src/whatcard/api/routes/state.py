from fastapi import APIRouter, Depends

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.api.deps import get_orchestrator
from whatcard.domain.models import WalletState

router = APIRouter(tags=["state"])


@router.get("/users/{user_id}/state")
def get_state(user_id: str, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.load_state(user_id).to_json_dict()


@router.put("/users/{user_id}/state")
def put_state(
    user_id: str,
    state: WalletState,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> dict[str, bool]:
    orchestrator.save_state(user_id, state)
    return {"ok": True}


@router.post("/users/{user_id}/state/seed", status_code=201)
def seed_state(user_id: str, orchestrator: WalletOrchestrator = Depends(get_orchestrator)) -> dict:
    return orchestrator.seed_state(user_id).to_json_dict()
