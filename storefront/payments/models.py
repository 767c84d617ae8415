"""
Contrats des collaborateurs de paiement consommés par l'orchestrateur.
- PaymentIntentProvider: montant -> client secret (ou None si échec).
- PaymentSheet: capacité du SDK processeur (init, present), erreurs renvoyées en valeur.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

# Codes alignés sur la feuille de paiement native
ERROR_CANCELED = "Canceled"
ERROR_FAILED = "Failed"


@dataclass(frozen=True)
class ProcessorError:
    code: str
    message: str


@dataclass(frozen=True)
class ProcessorResult:
    error: Optional[ProcessorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PaymentIntentProvider(Protocol):
    async def request_intent(self, amount: Decimal) -> Optional[str]:
        ...


class PaymentSheet(Protocol):
    async def init(self, client_secret: str, merchant_display_name: str) -> ProcessorResult:
        ...

    async def present(self) -> ProcessorResult:
        ...
