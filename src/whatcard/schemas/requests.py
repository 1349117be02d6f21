from datetime import date

from pydantic import field_validator

from whatcard.domain.models import WalletModel
from whatcard.domain.values import parse_amount


class RecommendRequest(WalletModel):
    merchant: str = ""
    amount: float = 0
    category: str | None = None
    benefit_override: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> float:
        return parse_amount(value)


class UseCardRequest(RecommendRequest):
    card_id: str


class BenefitBalanceRequest(WalletModel):
    amount: float

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> float:
        return parse_amount(value)


class AnnualFeeRequest(WalletModel):
    balance: float
    paid_on: date
    total_fee: float
