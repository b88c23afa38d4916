"""
Point d'entrée principal du service de checkout.

Usage:
    python -m storefront

Variables d'environnement lues (via storefront.config):
- PORT: port d'écoute (par défaut 8000)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs (ex: "info", "debug")
"""
import logging
import uvicorn
from storefront import config

def main() -> None:
    # Les loggers applicatifs (storefront.*) suivent le niveau demandé
    logging.basicConfig(level=config.LOG_LEVEL.upper(), format="%(levelname)s:     %(name)s - %(message)s")
    uvicorn.run(
        "storefront.asgi:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=config.UVICORN_RELOAD,
        log_level=config.LOG_LEVEL,
    )

if __name__ == "__main__":
    main()
