"""
Middlewares transverses de l’application.
- register_basic_middlewares: session (assistant de commande), CORS, TrustedHost, en-têtes de proxy.
- register_security_middleware: en-têtes de sécurité et CSP (Stripe.js autorisé).
Notes:
- La session cookie ne transporte que {name, email} entre les deux étapes de l'assistant.
- ProxyHeadersMiddleware est ajouté en dernier pour s'exécuter en premier: le rate limiting
  voit l'IP réécrite, et seulement pour les proxys de FORWARDED_ALLOW_IPS.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from storefront.config import SESSION_SECRET_KEY, COOKIE_SECURE, CORS_ORIGINS, ALLOWED_HOSTS, FORWARDED_ALLOW_IPS

STRIPE_JS = "https://js.stripe.com"
STRIPE_API = "https://api.stripe.com"

def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - SessionMiddleware: cookie signé pour porter name/email de l'étape 1 à l'étape 2.
    - CORSMiddleware: autorise les origines définies (dev/prod).
    - TrustedHostMiddleware: limite les hôtes acceptés à ALLOWED_HOSTS (défense host header).
    - ProxyHeadersMiddleware: X-Forwarded-For n'est pris en compte que venant d'un proxy de confiance.
    """
    app.add_middleware(
        SessionMiddleware,
        secret_key=SESSION_SECRET_KEY,
        https_only=COOKIE_SECURE,
        same_site="lax",
        max_age=60 * 60,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=FORWARDED_ALLOW_IPS)

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")

        # CSP: Stripe.js (iframe carte) + CDNs de la doc Swagger
        swagger_cdns = ["https://cdn.jsdelivr.net", "https://unpkg.com"]
        csp = (
            "default-src 'self'; "
            "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
            f"img-src 'self' data: https://fastapi.tiangolo.com; "
            f"style-src 'self' 'unsafe-inline' {' '.join(swagger_cdns)}; "
            f"script-src 'self' 'unsafe-inline' {STRIPE_JS} {' '.join(swagger_cdns)}; "
            f"frame-src {STRIPE_JS}; "
            f"connect-src 'self' {STRIPE_API}"
        )
        response.headers["Content-Security-Policy"] = csp
        return response
