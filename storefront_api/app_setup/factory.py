"""
Factory d'application pour les entrypoints (ex: storefront_api.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_api.config import CORS_ORIGINS
from .lifespan import lifespan
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - CORS (dev)
      - gestionnaires d'exceptions (enveloppe {success, message})
      - routers paiements, commandes, health
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    register_routers(app)
    return app
