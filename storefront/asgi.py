"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn -k uvicorn.workers.UvicornWorker) importe
  `storefront.asgi:app` pour servir l’application FastAPI.
- Toute la configuration est centralisée dans storefront.app, ce fichier ne fait qu’exposer l’instance.
"""

from storefront.app import app
