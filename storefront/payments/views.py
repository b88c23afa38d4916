import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront import config
from storefront.errors import CheckoutError
from storefront.utils.rate_limit import optional_rate_limit
from . import service as payments_service
from .models import BuyRequest, PayRequest, PaymentRecord

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["Payments API"])

# module storefront.payments.views
@router.post(
    "/buy",
    status_code=201,
    response_model=PaymentRecord,
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
def buy(order: BuyRequest) -> PaymentRecord:
    """
    Checkout « amount + paymentMethodId ».
    - Entrée JSON: {name, email, address, postcode, country, phone?, amount, paymentMethodId}
    - Étapes: validation saisie -> PaymentIntent confirmé -> licence + écriture atomique
    - Réponse 201: le paiement créé
    - Erreurs: {"error": "..."} avec 400 (saisie), 402 (Payment Failed), 500 (base)
    """
    return payments_service.checkout(order)

@router.post("/pay", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def pay(order: PayRequest):
    """
    Checkout « priceId + quantity » (utilisé par l'assistant /checkout).
    - Entrée JSON: {priceId, quantity, paymentMethodId, customerDetails: {...}} ou name/email à plat
    - Réponse: {"success": true, "paymentIntent": {...}, "payment": {...}}
    - Erreurs: {"success": false, "error": "..."} avec le code HTTP de l'erreur
    """
    try:
        return payments_service.checkout_price(order)
    except CheckoutError as e:
        logger.info("payments.pay failed status=%s error=%s", e.status_code, e.message)
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": e.message})

@router.get("/config")
def payments_config() -> Dict[str, Any]:
    """Clé publique Stripe et devise pour le script client de l'assistant."""
    return {"publishableKey": config.STRIPE_PUBLIC_KEY, "currency": config.CURRENCY}

