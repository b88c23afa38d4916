# module storefront.wizard.views

"""Assistant de commande en deux étapes (pages HTML).
- Étape 1 (/checkout): identité + adresse; seuls name et email passent à l'étape 2 (session)
- Étape 2 (/checkout/payment): priceId + quantité; le script public/js/checkout.js
  appelle POST /api/payments/pay avec {priceId, quantity, name, email, paymentMethodId}
L'étape 2 n'est jamais rendue tant que la session ne contient pas name ET email.
"""
from typing import Optional
from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER
from storefront import config
from storefront.utils.templates import templates
from storefront.utils.validators import normalize_email

web_router = APIRouter(tags=["Checkout Pages"])

SESSION_KEY = "checkout_buyer"

def _no_store(resp):
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    resp.headers["Pragma"] = "no-cache"
    resp.headers["Expires"] = "0"
    return resp

def carried_buyer(request: Request) -> Optional[dict]:
    """Retourne {name, email} reçus de l'étape 1, ou None si l'un des deux manque."""
    buyer = request.session.get(SESSION_KEY) or {}
    name = (buyer.get("name") or "").strip()
    email = (buyer.get("email") or "").strip()
    if not name or not email:
        return None
    return {"name": name, "email": email}

@web_router.get("/checkout", response_class=HTMLResponse)
def checkout_details_page(request: Request):
    """Étape 1: formulaire identité/adresse (champs requis marqués required)."""
    resp = templates.TemplateResponse(
        request,
        "checkout_details.html",
        {"error": None, "values": carried_buyer(request) or {}, "postcode_length": config.POSTCODE_LENGTH},
    )
    return _no_store(resp)

@web_router.post("/checkout/details", response_class=HTMLResponse)
def checkout_details_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    address: str = Form(""),
    postcode: str = Form(""),
    country: str = Form(""),
    phone: str = Form(""),
):
    """Soumission locale de l'étape 1.
    - name et email obligatoires, sinon ré-affichage (400) avec message
    - seuls name et email sont conservés (session) puis redirection 303 vers l'étape 2
    """
    name = (name or "").strip()
    email = normalize_email(email)
    if not name or not email:
        resp = templates.TemplateResponse(
            request,
            "checkout_details.html",
            {
                "error": "Le nom et l'email sont obligatoires",
                "values": {"name": name, "email": email, "address": address, "postcode": postcode, "country": country, "phone": phone},
                "postcode_length": config.POSTCODE_LENGTH,
            },
            status_code=400,
        )
        return _no_store(resp)
    request.session[SESSION_KEY] = {"name": name, "email": email}
    return RedirectResponse(url="/checkout/payment", status_code=HTTP_303_SEE_OTHER)

@web_router.get("/checkout/payment", response_class=HTMLResponse)
def checkout_payment_page(request: Request):
    """Étape 2: prix + quantité. Redirige vers /checkout si name/email n'ont pas été fournis."""
    buyer = carried_buyer(request)
    if buyer is None:
        return RedirectResponse(url="/checkout", status_code=HTTP_303_SEE_OTHER)
    resp = templates.TemplateResponse(
        request,
        "checkout_payment.html",
        {
            "buyer": buyer,
            "stripe_public_key": config.STRIPE_PUBLIC_KEY,
            "currency": config.CURRENCY,
        },
    )
    return _no_store(resp)

@web_router.post("/checkout/reset", include_in_schema=False)
def checkout_reset(request: Request):
    """Vide l'assistant et revient à l'étape 1."""
    request.session.pop(SESSION_KEY, None)
    return RedirectResponse(url="/checkout", status_code=HTTP_303_SEE_OTHER)
