import os

# Pas de Redis en tests: le lifespan désactive le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.app import app as fastapi_app
from storefront import config

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)
        elif "/tests/functional/" in nodeid or nodeid.startswith("tests/functional/"):
            item.add_marker(pytest.mark.functional)


class FakeStore:
    """
    Base en mémoire qui respecte le contrat de la fonction SQL fulfill_checkout:
    find-or-create de l'utilisateur par email puis insertion du paiement.
    """

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.payments: List[Dict[str, Any]] = []

    def get_user_by_email(self, email: str) -> Optional[dict]:
        return self.users.get((email or "").lower())

    def get_user_by_id(self, user_id: str) -> Optional[dict]:
        return next((u for u in self.users.values() if u["id"] == user_id), None)

    def insert_user(self, row: Dict[str, Any]) -> dict:
        user = {"id": f"user-{len(self.users) + 1}", **row}
        self.users[row["email"].lower()] = user
        created = dict(user)
        created.pop("password_hash", None)
        return created

    def fulfill_checkout(self, *, user_fields, amount, currency, status, license_key, payment_intent_id=None):
        user = self.get_user_by_email(user_fields["email"])
        if user is None:
            user = {"id": f"user-{len(self.users) + 1}", **user_fields}
            self.users[user_fields["email"].lower()] = user
        row = {
            "id": f"pay-{len(self.payments) + 1}",
            "user_id": user["id"],
            "amount": amount,
            "currency": currency,
            "status": status,
            "license_key": license_key,
            "payment_intent_id": payment_intent_id,
            "created_at": "2026-01-01T00:00:00+00:00",
        }
        self.payments.append(row)
        return dict(row)

    def list_payments_for_user(self, user_id: str, limit: int = 50) -> List[dict]:
        return [p for p in reversed(self.payments) if p["user_id"] == user_id][:limit]


class FakeStripe:
    """Enregistre les appels de charge et renvoie un PaymentIntent au statut choisi."""

    def __init__(self, status: str = "succeeded"):
        self.status = status
        self.calls: List[Dict[str, Any]] = []
        self.prices: Dict[str, int] = {"price_basic": 1500}

    def create_and_confirm_charge(self, amount, payment_method_id, *, currency=None, receipt_email=None, metadata=None):
        self.calls.append({"amount": amount, "payment_method_id": payment_method_id, "currency": currency, "receipt_email": receipt_email})
        return {"id": f"pi_{len(self.calls)}", "status": self.status, "amount": amount, "currency": currency or "eur"}

    def resolve_price(self, price_id: str, quantity: int):
        from storefront.errors import ValidationError
        if price_id not in self.prices:
            raise ValidationError("Unknown priceId")
        return self.prices[price_id] * quantity, "eur"


@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Aucun accès réseau à Supabase pendant les tests
@pytest.fixture(autouse=True)
def _no_supabase(monkeypatch):
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: MagicMock())

@pytest.fixture()
def fake_store(monkeypatch) -> FakeStore:
    store = FakeStore()
    monkeypatch.setattr("storefront.payments.repository.fulfill_checkout", store.fulfill_checkout)
    monkeypatch.setattr("storefront.payments.repository.list_payments_for_user", store.list_payments_for_user)
    monkeypatch.setattr("storefront.users.repository.get_user_by_email", store.get_user_by_email)
    monkeypatch.setattr("storefront.users.repository.get_user_by_id", store.get_user_by_id)
    monkeypatch.setattr("storefront.users.repository.insert_user", store.insert_user)
    return store

@pytest.fixture()
def fake_stripe(monkeypatch) -> FakeStripe:
    gateway = FakeStripe()
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr("storefront.payments.stripe_client.create_and_confirm_charge", gateway.create_and_confirm_charge)
    monkeypatch.setattr("storefront.payments.stripe_client.resolve_price", gateway.resolve_price)
    return gateway

@pytest.fixture()
def buyer_payload() -> Dict[str, Any]:
    return {
        "name": "Ada Lovelace",
        "email": "Ada@Example.com",
        "address": "12 rue des Lilas",
        "postcode": "750011",
        "country": "FR",
        "amount": 4900,
        "paymentMethodId": "pm_card_visa",
    }
