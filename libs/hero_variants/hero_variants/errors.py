"""
Exceptions du moteur de variantes hero.

UnknownVariantError   → variante absente du registry (fatal pour l'appel)
UnknownStrategyError  → stratégie de migration inconnue
SchemaValidationError → auto-contrôle du registry au démarrage uniquement
"""
from typing import List


class HeroVariantError(Exception):
    """Erreur de base du moteur hero_variants."""


class UnknownVariantError(HeroVariantError, KeyError):
    """Variante hero inconnue du registry."""

    def __init__(self, variant):
        self.variant = variant
        super().__init__(f"Variante hero inconnue : {variant!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownStrategyError(HeroVariantError, KeyError):
    """Stratégie de migration inconnue."""

    def __init__(self, name, available: List[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f"Stratégie inconnue : {name!r}. Disponibles : {self.available}")

    def __str__(self) -> str:
        return self.args[0]


class SchemaValidationError(HeroVariantError):
    """Le registry contient un schéma invalide (levée au chargement du module)."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Registry hero invalide :\n  - " + "\n  - ".join(self.errors))
