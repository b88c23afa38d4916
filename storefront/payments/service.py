"""
Cas d'usage 'payments': orchestre intake, stripe_client, licences et repository.

Pipeline strictement séquentiel, une requête = un appel Stripe + un appel base:
  1) intake: validation/normalisation de la saisie
  2) charge: PaymentIntent créé et confirmé, seul "succeeded" est un succès
  3) fulfilment: émission de la licence puis écriture atomique (user + payment)
"""
import logging
from typing import Any, Dict, Optional

from storefront import config
from storefront.errors import PaymentFailed, StoreError
from . import intake
from . import repository
from . import stripe_client
from .licenses import LicenseIssuer, issue_license_key
from .models import BuyerDetails, BuyRequest, PayRequest, PaymentRecord

logger = logging.getLogger(__name__)

PAYMENT_STATUS_SUCCESS = "success"

def charge(amount: int, payment_method_id: str, buyer: BuyerDetails, currency: Optional[str] = None) -> Dict[str, Any]:
    """
    Débite l'acheteur et vérifie le statut retourné.
    - Soulève PaymentFailed si le statut n'est pas exactement "succeeded" (aucune écriture ensuite).
    """
    intent = stripe_client.create_and_confirm_charge(
        amount,
        payment_method_id,
        currency=currency,
        receipt_email=str(buyer.email),
        metadata={"email": str(buyer.email)},
    )
    if not stripe_client.is_succeeded(intent):
        logger.warning(
            "payments.charge not succeeded payment_intent=%s status=%s",
            intent.get("id"), intent.get("status"),
        )
        raise PaymentFailed()
    return intent

def fulfill(
    buyer: BuyerDetails,
    intent: Dict[str, Any],
    *,
    amount: int,
    currency: str,
    license_issuer: LicenseIssuer = issue_license_key,
) -> PaymentRecord:
    """
    Après un débit réussi: émet la licence puis écrit user + payment en une transaction.
    Si l'écriture échoue, le débit est déjà pris: on journalise l'id du PaymentIntent
    pour remboursement manuel et on remonte StoreError.
    """
    license_key = license_issuer()
    if not license_key:
        raise StoreError("License issuer returned an empty token")
    try:
        row = repository.fulfill_checkout(
            user_fields=buyer.user_fields(),
            amount=amount,
            currency=currency,
            status=PAYMENT_STATUS_SUCCESS,
            license_key=license_key,
            payment_intent_id=intent.get("id"),
        )
    except StoreError:
        logger.error(
            "payments.fulfill failed after successful charge payment_intent=%s email=%s: refund required",
            intent.get("id"), buyer.email,
        )
        raise
    record = PaymentRecord.model_validate(row)
    logger.info("payments.fulfill ok payment=%s user=%s amount=%s", record.id, record.user_id, record.amount)
    return record

def checkout(order: BuyRequest, *, license_issuer: LicenseIssuer = issue_license_key) -> PaymentRecord:
    """
    Variante « amount + paymentMethodId » (POST /api/payments/buy).
    Retourne le paiement créé.
    """
    buyer = intake.validate_intake(order.buyer(), require_postcode=True)
    currency = config.CURRENCY
    intent = charge(order.amount, order.payment_method_id, buyer, currency)
    return fulfill(buyer, intent, amount=order.amount, currency=currency, license_issuer=license_issuer)

def checkout_price(order: PayRequest, *, license_issuer: LicenseIssuer = issue_license_key) -> Dict[str, Any]:
    """
    Variante « priceId + quantity + coordonnées » (POST /api/payments/pay).
    - Le code postal n'est contrôlé que s'il est fourni (l'assistant n'envoie que name/email).
    - Le montant est résolu depuis le Price Stripe.
    Retour: {"success": True, "paymentIntent": {id, status, amount, currency}, "payment": {...}}
    """
    buyer = intake.validate_intake(order.customer_details, require_postcode=False)
    amount, currency = stripe_client.resolve_price(order.price_id, order.quantity)
    intent = charge(amount, order.payment_method_id, buyer, currency)
    record = fulfill(buyer, intent, amount=amount, currency=currency, license_issuer=license_issuer)
    return {
        "success": True,
        "paymentIntent": {
            "id": intent.get("id"),
            "status": intent.get("status"),
            "amount": intent.get("amount", amount),
            "currency": intent.get("currency", currency),
        },
        "payment": record.model_dump(),
    }
