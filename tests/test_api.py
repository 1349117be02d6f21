import pytest
from fastapi.testclient import TestClient

from whatcard.agents.orchestrator import WalletOrchestrator
from whatcard.api.app import app
from whatcard.api.deps import get_orchestrator
from whatcard.domain.models import Offer
from whatcard.ledger.wallet import add_offer
from whatcard.repository.seed import default_state
from whatcard.repository.state_store import InMemoryStateStore


@pytest.fixture
def client(catalog_store):
    orchestrator = WalletOrchestrator(catalog_store, InMemoryStateStore())
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice(client, catalog_store) -> str:
    state = default_state(catalog_store.load_cards(), [])
    state = add_offer(
        state,
        Offer(id="nike", card_id="amex-gold", merchant_name="Nike", offer_type="percent_back", percent_back=10, max_reward=15),
    )
    response = client.put("/users/alice/state", json=state.to_json_dict())
    assert response.status_code == 200
    return "alice"


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_missing_state_is_404(client) -> None:
    response = client.get("/users/bob/state")

    assert response.status_code == 404
    assert "bob" in response.json()["detail"]


def test_invalid_user_id_is_400(client) -> None:
    assert client.get("/users/bad$id/state").status_code == 400


def test_seed_creates_state(client) -> None:
    response = client.post("/users/carol/state/seed")

    assert response.status_code == 201
    body = response.json()
    assert 3 <= len(body["activeCardIds"]) <= 5
    assert client.get("/users/carol/state").json()["activeCardIds"] == body["activeCardIds"]


def test_recommend_guesses_category(client, alice: str) -> None:
    response = client.post(f"/users/{alice}/recommend", json={"merchant": "Uber", "amount": "12"})

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "Travel"
    assert body["bestCard"]["card"]["id"] == "amex-platinum"
    assert body["bestCard"]["breakdown"]["matchedBenefitIds"] == ["plat-uber"]
    assert len(body["rankedCards"]) == 5


def test_use_card_then_delete_transaction(client, alice: str) -> None:
    response = client.post(
        f"/users/{alice}/transactions",
        json={"cardId": "amex-platinum", "merchant": "Uber", "amount": 12},
    )
    assert response.status_code == 201
    state = response.json()
    assert state["benefitBalances"]["plat-uber"] == 3
    assert state["annualFeeBalances"]["amex-platinum"] == 683
    [record] = state["transactionHistory"]
    assert record["feeOffset"] == 12
    assert record["offsetDetails"][0]["benefitId"] == "plat-uber"

    response = client.delete(f"/users/{alice}/transactions/{record['id']}")
    assert response.status_code == 200
    state = response.json()
    assert state["benefitBalances"]["plat-uber"] == 15
    assert state["annualFeeBalances"]["amex-platinum"] == 695
    assert state["transactionHistory"] == []


def test_delete_unknown_transaction_is_404(client, alice: str) -> None:
    assert client.delete(f"/users/{alice}/transactions/tx-nope").status_code == 404


def test_use_unknown_card_is_404(client, alice: str) -> None:
    response = client.post(f"/users/{alice}/transactions", json={"cardId": "nope", "merchant": "Uber", "amount": 5})

    assert response.status_code == 404


def test_use_card_requires_card_id(client, alice: str) -> None:
    response = client.post(f"/users/{alice}/transactions", json={"merchant": "Uber", "amount": 5})

    assert response.status_code == 422


def test_used_offer_drops_out_of_ranking(client, alice: str) -> None:
    before = client.post(f"/users/{alice}/recommend", json={"merchant": "Nike", "amount": 200, "category": "Shopping"})
    gold = next(r for r in before.json()["rankedCards"] if r["card"]["id"] == "amex-gold")
    assert gold["breakdown"]["offersValue"] == 15

    response = client.post(f"/users/{alice}/offers/nike/used")
    assert response.status_code == 200
    assert response.json()["activeOffers"][0]["isUsed"] is True

    after = client.post(f"/users/{alice}/recommend", json={"merchant": "Nike", "amount": 200, "category": "Shopping"})
    gold = next(r for r in after.json()["rankedCards"] if r["card"]["id"] == "amex-gold")
    assert gold["breakdown"]["offersValue"] == 0


def test_wallet_edits_persist(client, alice: str) -> None:
    response = client.put(f"/users/{alice}/benefits/plat-saks/balance", json={"amount": "12.50"})
    assert response.status_code == 200
    assert response.json()["benefitBalances"]["plat-saks"] == 12.5

    response = client.put(
        f"/users/{alice}/cards/amex-gold/annual-fee",
        json={"balance": 100, "paidOn": "2026-02-01", "totalFee": 325},
    )
    assert response.status_code == 200

    response = client.post(f"/users/{alice}/cards/chase-freedom-unlimited/toggle")
    assert "chase-freedom-unlimited" not in response.json()["activeCardIds"]

    state = client.get(f"/users/{alice}/state").json()
    assert state["benefitBalances"]["plat-saks"] == 12.5
    assert state["annualFeeBalances"]["amex-gold"] == 100
    assert state["annualFeeDates"]["amex-gold"] == "2026-02-01"
    assert state["customAnnualFees"]["amex-gold"] == 325


def test_update_offer_rejects_mismatched_id(client, alice: str) -> None:
    offer = {"id": "other", "cardId": "amex-gold", "merchantName": "Nike", "offerType": "percent_back", "percentBack": 5}

    assert client.put(f"/users/{alice}/offers/nike", json=offer).status_code == 400
    assert client.put(f"/users/{alice}/offers/other", json=offer).status_code == 404


def test_negative_amount_counts_as_zero(client, alice: str) -> None:
    response = client.post(f"/users/{alice}/transactions", json={"cardId": "amex-platinum", "merchant": "Uber", "amount": -20})

    assert response.status_code == 201
    state = response.json()
    assert state["benefitBalances"]["plat-uber"] == 15
    assert state["annualFeeBalances"]["amex-platinum"] == 695
    assert state["transactionHistory"][0]["amount"] == 0
