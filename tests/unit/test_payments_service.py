import pytest

from storefront.errors import PaymentFailed, StoreError, ValidationError
from storefront.payments import service
from storefront.payments.models import BuyRequest, PayRequest


def _order(buyer_payload, **overrides):
    data = dict(buyer_payload)
    data.update(overrides)
    return BuyRequest.model_validate(data)

def test_succeeded_charge_creates_one_user_and_one_payment(fake_store, fake_stripe, buyer_payload):
    record = service.checkout(_order(buyer_payload))

    assert len(fake_store.users) == 1
    assert len(fake_store.payments) == 1
    assert record.status == "success"
    assert record.amount == 4900
    assert record.payment_intent_id == "pi_1"
    user = fake_store.get_user_by_email("ada@example.com")
    assert user is not None
    assert record.user_id == user["id"]
    assert user["postcode"] == "750011"

def test_payment_references_user_and_carries_license(fake_store, fake_stripe, buyer_payload):
    record = service.checkout(_order(buyer_payload))
    assert record.license_key
    assert fake_store.get_user_by_id(record.user_id) is not None

def test_license_issuer_can_be_injected(fake_store, fake_stripe, buyer_payload):
    record = service.checkout(_order(buyer_payload), license_issuer=lambda: "LIC-FIXED")
    assert record.license_key == "LIC-FIXED"

@pytest.mark.parametrize("status", ["processing", "requires_action", "requires_payment_method", "canceled"])
def test_other_status_creates_no_records(fake_store, fake_stripe, buyer_payload, status):
    fake_stripe.status = status
    with pytest.raises(PaymentFailed) as exc:
        service.checkout(_order(buyer_payload))
    assert exc.value.message == "Payment Failed"
    assert fake_store.users == {}
    assert fake_store.payments == []

def test_same_email_reuses_existing_user(fake_store, fake_stripe, buyer_payload):
    first = service.checkout(_order(buyer_payload))
    second = service.checkout(_order(buyer_payload, email="ADA@example.com", amount=1000))

    assert len(fake_store.users) == 1
    assert len(fake_store.payments) == 2
    assert first.user_id == second.user_id

def test_invalid_postcode_never_charges(fake_store, fake_stripe, buyer_payload):
    with pytest.raises(ValidationError):
        service.checkout(_order(buyer_payload, postcode="123"))
    assert fake_stripe.calls == []
    assert fake_store.payments == []

def test_store_failure_after_charge_is_surfaced(monkeypatch, fake_stripe, buyer_payload, caplog):
    def _fail(**kwargs):
        raise StoreError()
    monkeypatch.setattr("storefront.payments.repository.fulfill_checkout", _fail)

    with caplog.at_level("ERROR", logger="storefront.payments.service"):
        with pytest.raises(StoreError):
            service.checkout(_order(buyer_payload))
    assert len(fake_stripe.calls) == 1
    assert "pi_1" in caplog.text
    assert "refund" in caplog.text

def test_empty_license_token_is_refused(fake_store, fake_stripe, buyer_payload):
    with pytest.raises(StoreError):
        service.checkout(_order(buyer_payload), license_issuer=lambda: "")
    assert fake_store.payments == []

def test_checkout_price_resolves_amount_and_carries_name_email(fake_store, fake_stripe):
    order = PayRequest.model_validate({
        "priceId": "price_basic",
        "quantity": 2,
        "paymentMethodId": "pm_card_visa",
        "name": "Grace Hopper",
        "email": "grace@example.com",
    })
    result = service.checkout_price(order)

    assert result["success"] is True
    assert result["paymentIntent"]["status"] == "succeeded"
    assert result["payment"]["amount"] == 3000
    assert fake_stripe.calls[0]["amount"] == 3000
    assert fake_stripe.calls[0]["receipt_email"] == "grace@example.com"
    assert fake_store.get_user_by_email("grace@example.com")["name"] == "Grace Hopper"

def test_checkout_price_with_customer_details(fake_store, fake_stripe):
    order = PayRequest.model_validate({
        "priceId": "price_basic",
        "paymentMethodId": "pm_card_visa",
        "customerDetails": {"name": "Grace", "email": "grace@example.com", "postcode": "123"},
    })
    with pytest.raises(ValidationError):
        service.checkout_price(order)
    assert fake_stripe.calls == []

def test_checkout_price_unknown_price(fake_store, fake_stripe):
    order = PayRequest.model_validate({
        "priceId": "price_unknown",
        "paymentMethodId": "pm_card_visa",
        "name": "Grace",
        "email": "grace@example.com",
    })
    with pytest.raises(ValidationError):
        service.checkout_price(order)
    assert fake_store.payments == []
