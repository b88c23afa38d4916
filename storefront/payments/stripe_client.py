"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.

Un seul appel bloquant par checkout (PaymentIntent créé et confirmé en une fois).
Pas de retry ni de clé d'idempotence: rejouer une requête après une coupure réseau
peut débiter deux fois.
"""
import logging
from typing import Any, Dict, Optional, Tuple
import stripe
from storefront import config
from storefront.errors import PaymentFailed, ValidationError

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"

# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - Sans clé, le paiement est refusé (PaymentFailed) plutôt que d'appeler le SDK.
    """
    if not config.STRIPE_SECRET_KEY:
        logger.error("STRIPE_SECRET_KEY manquant")
        raise PaymentFailed()
    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def _as_dict(obj: Any) -> Dict[str, Any]:
    # stripe retourne un StripeObject; on le traite comme dict-compatible
    if isinstance(obj, dict):
        return dict(obj)
    to_dict = getattr(obj, "to_dict", None) or getattr(obj, "to_dict_recursive", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)

def is_succeeded(intent: Dict[str, Any]) -> bool:
    return (intent or {}).get("status") == SUCCEEDED

def create_and_confirm_charge(
    amount: int,
    payment_method_id: str,
    *,
    currency: Optional[str] = None,
    receipt_email: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Crée et confirme un PaymentIntent Stripe (synchrone).
    - amount: entier en plus petite unité monétaire (> 0)
    - payment_method_id: référence du moyen de paiement (ex: "pm_card_visa")
    Retour: dict PaymentIntent (id, status, amount, ...). Le statut n'est pas interprété ici.
    Erreurs: ValidationError si amount <= 0, PaymentFailed sur toute erreur fournisseur.
    """
    if int(amount or 0) <= 0:
        raise ValidationError("Amount must be a positive integer")
    if not payment_method_id:
        raise ValidationError("paymentMethodId is required")
    require_stripe()
    params: Dict[str, Any] = {
        "amount": int(amount),
        "currency": (currency or config.CURRENCY).lower(),
        "payment_method": payment_method_id,
        "confirm": True,
        # Confirmation serveur: pas de redirection 3DS possible
        "automatic_payment_methods": {"enabled": True, "allow_redirects": "never"},
    }
    if receipt_email:
        params["receipt_email"] = receipt_email
    if metadata:
        params["metadata"] = metadata
    try:
        intent = stripe.PaymentIntent.create(**params)
    except stripe.StripeError as e:
        logger.warning("stripe PaymentIntent.create failed: %s", getattr(e, "user_message", None) or e)
        raise PaymentFailed() from e
    except Exception as e:
        logger.exception("stripe PaymentIntent.create unexpected error")
        raise PaymentFailed() from e
    return _as_dict(intent)

def resolve_price(price_id: str, quantity: int) -> Tuple[int, str]:
    """
    Résout un Price Stripe en (montant total, devise): unit_amount * quantity.
    - Soulève ValidationError si quantity < 1, Price inconnu ou sans unit_amount fixe
    - Soulève PaymentFailed si Stripe ne répond pas
    """
    if int(quantity or 0) < 1:
        raise ValidationError("Quantity must be at least 1")
    require_stripe()
    try:
        price = _as_dict(stripe.Price.retrieve(price_id))
    except stripe.InvalidRequestError as e:
        logger.warning("stripe Price.retrieve rejected price_id=%s: %s", price_id, e)
        raise ValidationError("Unknown priceId") from e
    except Exception as e:
        logger.exception("stripe Price.retrieve failed price_id=%s", price_id)
        raise PaymentFailed() from e
    unit_amount = price.get("unit_amount")
    if not unit_amount:
        raise ValidationError("Price has no fixed unit amount")
    currency = (price.get("currency") or config.CURRENCY).lower()
    return int(unit_amount) * int(quantity), currency

def amount_for_price(price_id: str, quantity: int) -> int:
    amount, _ = resolve_price(price_id, quantity)
    return amount
