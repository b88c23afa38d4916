"""
Schémas d'entrée/sortie de la feature 'payments'.

Deux formes de requête coexistent:
- BuyRequest (POST /api/payments/buy): champs acheteur + amount + paymentMethodId
- PayRequest (POST /api/payments/pay): priceId + quantity + coordonnées client
Les noms JSON suivent le camelCase du front (alias), les attributs Python restent en snake_case.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class BuyerDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    email: EmailStr
    address: Optional[str] = None
    # Le front envoie indifféremment "postcode" ou "pinCode"
    postcode: Optional[str] = Field(default=None, alias="pinCode")
    country: Optional[str] = None
    phone: Optional[str] = None
    username: Optional[str] = None

    def user_fields(self) -> Dict[str, Any]:
        """Colonnes de la table users alimentées par la saisie (valeurs vides exclues)."""
        fields = {
            "name": self.name,
            "email": str(self.email),
            "username": self.username,
            "address": self.address,
            "postcode": self.postcode,
            "country": self.country,
            "phone": self.phone,
        }
        return {k: v for k, v in fields.items() if v}


class BuyRequest(BuyerDetails):
    amount: int = Field(gt=0, description="Montant en plus petite unité monétaire (centimes)")
    payment_method_id: str = Field(alias="paymentMethodId", min_length=1)

    def buyer(self) -> BuyerDetails:
        return BuyerDetails.model_validate(self.model_dump(include=set(BuyerDetails.model_fields)))


class PayRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    price_id: str = Field(alias="priceId", min_length=1)
    quantity: int = Field(default=1, ge=1)
    payment_method_id: str = Field(alias="paymentMethodId", min_length=1)
    customer_details: BuyerDetails = Field(alias="customerDetails")

    @model_validator(mode="before")
    @classmethod
    def _carry_wizard_fields(cls, data: Any) -> Any:
        # L'assistant front n'envoie que name/email à plat: on les range dans customerDetails
        if isinstance(data, dict) and not data.get("customerDetails") and not data.get("customer_details"):
            if "name" in data or "email" in data:
                data = dict(data)
                data["customerDetails"] = {"name": data.pop("name", None), "email": data.pop("email", None)}
        return data


class PaymentRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    amount: int
    currency: str
    status: str
    license_key: str
    payment_intent_id: Optional[str] = None
    created_at: Optional[str] = None
