"""
Module 'payments' (feature-first): point d'entrée public.
Réunit validation de saisie, client Stripe, émission de licence, repository BD et services.
"""

from .intake import validate_intake
from .licenses import issue_license_key
from .stripe_client import require_stripe, create_and_confirm_charge, resolve_price, amount_for_price, is_succeeded
from .repository import fulfill_checkout, list_payments_for_user
from .service import checkout, checkout_price

__all__ = [
    # intake
    "validate_intake",
    # licences
    "issue_license_key",
    # stripe
    "require_stripe",
    "create_and_confirm_charge",
    "resolve_price",
    "amount_for_price",
    "is_succeeded",
    # repository
    "fulfill_checkout",
    "list_payments_for_user",
    # services
    "checkout",
    "checkout_price",
]
