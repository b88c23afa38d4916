"""
Gestionnaires d’exceptions utilisés par la factory.
- CheckoutError (ValidationError / PaymentFailed / StoreError): {"error": message} avec son code HTTP.
- RequestValidationError (schéma JSON invalide, champ manquant): 400 au même format.
- HTTPException génériques (404, 429...): {"detail": ...} standard FastAPI.
- Exceptions inattendues: middleware dédié, 500 au même format.
Sur /api/payments/pay, le corps porte aussi "success": false (contrat du script client).
"""
import logging
from typing import Any, Dict
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from storefront.errors import CheckoutError, PaymentFailed, StoreError

logger = logging.getLogger(__name__)

PAY_PATH = "/api/payments/pay"

def _error_body(request: Request, message: str) -> Dict[str, Any]:
    if request.url.path.rstrip("/") == PAY_PATH:
        return {"success": False, "error": message}
    return {"error": message}

def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors() or []
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg") or "invalid value"
    return f"{loc}: {msg}" if loc else msg

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers; chaque catégorie d'erreur est journalisée une seule fois, à son niveau.
    """
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if isinstance(exc, StoreError):
            logger.error("store error on %s: %s", request.url.path, exc.message)
        elif isinstance(exc, PaymentFailed):
            logger.warning("payment failed on %s", request.url.path)
        else:
            logger.info("validation error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _first_error_message(exc)
        logger.info("invalid request body on %s: %s", request.url.path, message)
        return JSONResponse(status_code=400, content=_error_body(request, message))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

def register_unexpected_error_middleware(app: FastAPI) -> None:
    """
    Erreurs non prévues -> 500 {"error": ...}, journalisées une seule fois.
    Doit être enregistré avant les autres middlewares (donc au plus près des routes):
    la réponse repasse ainsi par session, CORS et en-têtes de sécurité, et rien
    n'est relancé vers le serveur.
    """
    @app.middleware("http")
    async def unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unexpected error on %s", request.url.path)
            return JSONResponse(status_code=500, content=_error_body(request, StoreError.default_message))
