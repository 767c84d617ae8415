"""
Adaptateur Stripe côté serveur: centralise la configuration et la création des PaymentIntent.
"""
import stripe
from typing import Any, Dict

from storefront_api import config

# module storefront_api.payments.stripe_client
def require_stripe() -> stripe:
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if config.STRIPE_SECRET_KEY:
        stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def create_payment_intent(*, amount_cents: int, currency: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
    """
    Crée un PaymentIntent Stripe pour un montant en centimes.
    - automatic_payment_methods: laisse Stripe proposer les moyens de paiement activés (cartes)
    Retour: {"id": "pi_...", "client_secret": "pi_..._secret_..."}
    """
    require_stripe()
    intent = stripe.PaymentIntent.create(
        amount=amount_cents,
        currency=currency,
        automatic_payment_methods={"enabled": True, "allow_redirects": "never"},
        metadata=metadata,
    )
    # PaymentIntent (StripeObject): lecture par attribut
    return {"id": getattr(intent, "id", None), "client_secret": getattr(intent, "client_secret", None)}
