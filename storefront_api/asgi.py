"""
ASGI entrypoint: expose `app` for process managers / deployments.

- Un process manager (ex: uvicorn, gunicorn -k uvicorn.workers.UvicornWorker) importe `storefront_api.asgi:app`.
- Toute la configuration FastAPI est centralisée dans storefront_api.app_setup.factory,
  ce fichier ne fait qu'exposer l'instance `app`.
"""

from storefront_api.app_setup.factory import create_app

app = create_app()
