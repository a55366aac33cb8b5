"""
Exceptions métier du service checkout.
- ConfigMissing: secret requis absent (échec au démarrage, aucune requête servie).
- GatewayCallFailed: erreur réseau/validation côté Stripe non gérée localement.
- OrderStoreError: écriture de commande impossible (base indisponible, config absente).
"""


class CheckoutError(Exception):
    """Base des erreurs remontées par les adaptateurs."""


class ConfigMissing(CheckoutError, RuntimeError):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Variables d'environnement manquantes: {', '.join(self.missing)}")


class GatewayCallFailed(CheckoutError):
    pass


class OrderStoreError(CheckoutError):
    pass
