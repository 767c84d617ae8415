"""
Client storefront: panier, pipeline de checkout (intent -> processeur -> commande)
et présentation des issues. Voir storefront.session pour l'assemblage.
"""
