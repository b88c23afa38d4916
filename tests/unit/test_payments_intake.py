import pytest

from storefront.errors import ValidationError
from storefront.payments.intake import validate_intake
from storefront.payments.models import BuyerDetails


def _buyer(**overrides):
    data = {"name": "Ada", "email": "ada@example.com", "postcode": "123456", "country": "FR"}
    data.update(overrides)
    return BuyerDetails.model_validate(data)


@pytest.mark.parametrize("postcode", ["1", "123", "12345", "1234567", "123456789"])
def test_postcode_wrong_length_rejected(postcode):
    with pytest.raises(ValidationError) as exc:
        validate_intake(_buyer(postcode=postcode))
    assert exc.value.status_code == 400
    assert "6" in exc.value.message

def test_postcode_six_chars_accepted():
    buyer = validate_intake(_buyer(postcode="123456"))
    assert buyer.postcode == "123456"

def test_postcode_is_trimmed_before_check():
    buyer = validate_intake(_buyer(postcode="  AB12CD "))
    assert buyer.postcode == "AB12CD"

def test_pin_code_alias_is_accepted():
    buyer = BuyerDetails.model_validate({"name": "Ada", "email": "ada@example.com", "pinCode": "560001"})
    assert validate_intake(buyer).postcode == "560001"

def test_postcode_required_by_default():
    with pytest.raises(ValidationError):
        validate_intake(_buyer(postcode=None))

def test_postcode_optional_when_not_required():
    buyer = validate_intake(_buyer(postcode=None), require_postcode=False)
    assert buyer.postcode is None

def test_postcode_still_checked_when_optional_but_present():
    with pytest.raises(ValidationError):
        validate_intake(_buyer(postcode="123"), require_postcode=False)

def test_blank_name_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_intake(_buyer(name="   "))
    assert "Name" in exc.value.message

def test_email_is_normalised():
    buyer = validate_intake(_buyer(email="Ada@Example.COM"))
    assert buyer.email == "ada@example.com"

def test_postcode_length_follows_config(monkeypatch):
    monkeypatch.setattr("storefront.config.POSTCODE_LENGTH", 5)
    assert validate_intake(_buyer(postcode="75011")).postcode == "75011"
    with pytest.raises(ValidationError):
        validate_intake(_buyer(postcode="123456"))
