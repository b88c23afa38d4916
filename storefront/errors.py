"""
Erreurs du parcours de checkout.

Taxonomie volontairement plate:
- ValidationError: saisie refusée (code postal, champ manquant) -> 400
- PaymentFailed: statut Stripe différent de "succeeded" ou erreur fournisseur -> 402
- StoreError: échec d'écriture/lecture Supabase ou erreur inattendue -> 500

Toutes héritent de HTTPException pour profiter de la chaîne de handlers FastAPI.
"""
from typing import Optional
from fastapi import HTTPException

PAYMENT_FAILED_MESSAGE = "Payment Failed"


class CheckoutError(HTTPException):
    status_code = 400
    default_message = "Checkout error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(
            status_code=status_code or self.status_code,
            detail=message or self.default_message,
        )

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(CheckoutError):
    status_code = 400
    default_message = "Invalid submission"


class PaymentFailed(CheckoutError):
    status_code = 402
    default_message = PAYMENT_FAILED_MESSAGE


class StoreError(CheckoutError):
    status_code = 500
    default_message = "Unexpected store error"
