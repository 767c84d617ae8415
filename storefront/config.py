# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration du client storefront.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose l'URL de l'API (intent de paiement, commandes) et le token Bearer
- Expose la clé publique Stripe et le moyen de paiement utilisé par la feuille de paiement
- Fournit le nom marchand affiché et la route de l'historique d'achats
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# API backend: sans slash final pour composer les chemins
API_BASE_URL = _clean_env(os.getenv("API_BASE_URL") or "http://localhost:8000")
if API_BASE_URL.endswith("/"):
    API_BASE_URL = API_BASE_URL.rstrip("/")

# Token de session (persisté par la couche login, hors périmètre)
API_TOKEN = _clean_env(os.getenv("API_TOKEN") or "")

# Timeout appliqué par le client HTTP (l'orchestrateur n'en impose aucun)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

# Stripe côté client: clé publique + moyen de paiement confirmé par la feuille
STRIPE_PUBLISHABLE_KEY = _clean_env(os.getenv("STRIPE_PUBLISHABLE_KEY") or os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_PAYMENT_METHOD = _clean_env(os.getenv("STRIPE_PAYMENT_METHOD") or "pm_card_visa")

MERCHANT_DISPLAY_NAME = os.getenv("MERCHANT_DISPLAY_NAME", "Study Materials Store")
ORDER_HISTORY_ROUTE = os.getenv("ORDER_HISTORY_ROUTE", "PurchaseHistory")
