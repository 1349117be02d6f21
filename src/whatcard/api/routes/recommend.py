from fastapi import APIRouter, Depends

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.api.deps import get_orchestrator
from whatcard.schemas.requests import RecommendRequest
from whatcard.schemas.responses import RecommendResponse

router = APIRouter(tags=["recommend"])


@router.post("/users/{user_id}/recommend", response_model=RecommendResponse)
def recommend(
    user_id: str,
    request: RecommendRequest,
    orchestrator: WalletOrchestrator = Depends(get_orchestrator),
) -> RecommendResponse:
    return orchestrator.recommend(user_id, request)
