"""
Registre central des routers (pages, API, health).
- Pages: assistant de commande (/checkout)
- API: payments (/api/payments), users (/api/users)
- Health: /health
"""
from fastapi import FastAPI
from storefront.wizard.views import web_router as wizard_web_router
from storefront.payments.views import router as payments_router
from storefront.users.views import api_router as users_api_router
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    # Pages web (HTML)
    app.include_router(wizard_web_router)
    # API
    app.include_router(payments_router)
    app.include_router(users_api_router)
    # Health & monitoring
    app.include_router(health_router)
