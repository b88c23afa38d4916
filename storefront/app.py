# module storefront.app
from fastapi import FastAPI

from storefront.app_setup.lifespan import lifespan
from storefront.app_setup.middlewares import register_basic_middlewares, register_security_middleware
from storefront.app_setup.exceptions import register_exception_handlers, register_unexpected_error_middleware
from storefront.app_setup.static import mount_static_files
from storefront.app_setup.routes import register_routes
from storefront.app_setup.routers import register_routers

def create_app() -> FastAPI:
    """
    Crée et configure l’instance FastAPI de l’application.
    Étapes et ordre (le dernier middleware ajouté s'exécute en premier):
      1) register_unexpected_error_middleware: 500 JSON au plus près des routes.
      2) register_basic_middlewares: session, CORS, TrustedHost, en-têtes de proxy.
      3) mount_static_files: expose /public.
      4) register_security_middleware: en-têtes de sécurité + CSP.
      5) register_exception_handlers: erreurs checkout -> {"error": ...}.
      6) register_routes: routes de base (/, favicon).
      7) register_routers: assistant, API payments/users, health.
    Retourne:
      - FastAPI: l’application prête à être servie (ASGI).
    """
    app = FastAPI(title="Storefront Checkout API", lifespan=lifespan)
    register_unexpected_error_middleware(app)
    register_basic_middlewares(app)
    mount_static_files(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app

# App globale
app = create_app()
