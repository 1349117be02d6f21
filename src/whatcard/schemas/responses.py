from whatcard.domain.models import RankedResult, WalletModel


class RecommendResponse(WalletModel):
    best_card: RankedResult | None
    ranked_cards: list[RankedResult]
    category: str
