"""
API storefront (développement / tests d'intégration du client).
Expose les endpoints consommés par le client: intent de paiement, commandes, health.
"""
