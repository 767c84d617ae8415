"""
Registre central des routers (API paiements, API commandes, health).
"""
from fastapi import FastAPI
from storefront_api.payments import views as payments_views
from storefront_api.orders import views as orders_views
from storefront_api.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins (évités par préfixes).
    """
    app.include_router(payments_views.router)
    app.include_router(orders_views.router)
    # Health & monitoring
    app.include_router(health_router)
