from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Currency = Literal["USD", "MR", "UR"]
Issuer = Literal["Amex", "Chase"]


class WalletModel(BaseModel):
    """Base for everything that is persisted in, or returned with, a wallet snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class BonusCategory(WalletModel):
    id: str | None = None
    name: str
    multiplier: float = Field(ge=0)
    currency: Currency
    cap_amount: float | None = None


class Benefit(WalletModel):
    id: str
    name: str
    merchant_filter: list[str] = Field(default_factory=list)
    amount: float = Field(ge=0)
    frequency: Literal["monthly", "quarterly", "annually", "once"] = "annually"
    type: Literal["credit"] = "credit"
    expiration_date: date | None = None


class Card(WalletModel):
    id: str
    name: str
    issuer: Issuer
    annual_fee: float = 0
    base_bonus_categories: list[BonusCategory] = Field(default_factory=list)
    benefits: list[Benefit] = Field(default_factory=list)
    image_color: str | None = None

    def find_benefit(self, benefit_id: str) -> Benefit | None:
        return next((b for b in self.benefits if b.id == benefit_id), None)


class Offer(WalletModel):
    id: str
    card_id: str
    merchant_name: str
    offer_type: Literal["spend_X_get_Y", "percent_back"]
    min_spend: float | None = None
    fixed_reward: float | None = None
    percent_back: float | None = None
    max_reward: float | None = None
    expiration_date: date | None = None
    is_used: bool = False


class OffsetDetail(WalletModel):
    name: str
    type: Literal["perk", "offer"]
    value: float
    benefit_id: str | None = None
    offer_id: str | None = None
    # benefit maximum at the time the perk was consumed
    benefit_cap: float | None = None


class TransactionRecord(WalletModel):
    id: str
    card_id: str
    merchant_name: str
    date: datetime
    amount: float
    fee_offset: float
    offset_details: list[OffsetDetail] = Field(default_factory=list)


class WalletState(WalletModel):
    version: int | None = None
    cards: list[Card] = Field(default_factory=list)
    active_card_ids: list[str] = Field(default_factory=list)
    active_offers: list[Offer] = Field(default_factory=list)
    transaction_history: list[TransactionRecord] = Field(default_factory=list)
    benefit_balances: dict[str, float] = Field(default_factory=dict)
    custom_annual_fees: dict[str, float] = Field(default_factory=dict)
    annual_fee_balances: dict[str, float] = Field(default_factory=dict)
    annual_fee_dates: dict[str, date] = Field(default_factory=dict)

    def find_card(self, card_id: str) -> Card | None:
        return next((c for c in self.cards if c.id == card_id), None)

    def find_offer(self, offer_id: str) -> Offer | None:
        return next((o for o in self.active_offers if o.id == offer_id), None)

    def current_fee_balance(self, card: Card) -> float:
        if card.id in self.annual_fee_balances:
            return self.annual_fee_balances[card.id]
        return self.custom_annual_fees.get(card.id, card.annual_fee)


class BenefitUsage(WalletModel):
    benefit_id: str
    used_amount: float


class OfferUsage(WalletModel):
    offer_id: str
    offer_name: str
    used_amount: float


class CardValuation(WalletModel):
    """Value of one card for one hypothetical purchase."""

    card_id: str
    total_value: float
    points_value: float
    benefits_value: float
    offers_value: float
    points_earned: float
    multiplier: float
    currency: Currency
    matched_category: str = "Other"
    matched_benefit_ids: list[str] = Field(default_factory=list)
    matched_benefit_names: list[str] = Field(default_factory=list)
    matched_offer_ids: list[str] = Field(default_factory=list)
    matched_offer_names: list[str] = Field(default_factory=list)
    benefit_details: list[BenefitUsage] = Field(default_factory=list)
    reasoning: str = ""


class RecommendationBreakdown(WalletModel):
    points_value: float
    points_earned: float
    benefits_value: float
    offers_value: float
    matched_category: str
    matched_benefit_names: list[str] = Field(default_factory=list)
    matched_benefit_ids: list[str] = Field(default_factory=list)
    matched_offer_names: list[str] = Field(default_factory=list)
    matched_offer_ids: list[str] = Field(default_factory=list)
    benefit_details: list[BenefitUsage] = Field(default_factory=list)
    offer_details: list[OfferUsage] = Field(default_factory=list)


class RankedResult(WalletModel):
    card: Card
    total_value: float
    breakdown: RecommendationBreakdown
    reasoning: str = ""
