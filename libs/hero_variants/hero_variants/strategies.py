"""
Stratégies de migration : politiques nommées et immuables.

Une stratégie ne dépend pas de la paire de variantes. Elle décide seulement
quelles correspondances le Migrator a le droit d'appliquer :
  - conservative → reports directs uniquement + défauts cible complets
  - balanced     → reports directs + transformations structurelles (boutons ⇄ liste)
  - flexible     → balanced + coercitions best-effort (texte ⇄ bloc, vidéo ⇄ média…)
"""
import logging
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

from . import config
from .errors import UnknownStrategyError

log = logging.getLogger(__name__)

StrategyName = Literal["conservative", "balanced", "flexible"]


class MigrationStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    allow_structural: bool = False
    allow_coercion: bool = False
    # Remplit aussi les champs optionnels de la cible depuis son instance par défaut
    fill_optional_defaults: bool = False


_STRATEGIES: Dict[str, MigrationStrategy] = {
    "conservative": MigrationStrategy(
        name="conservative",
        description="Conserve uniquement les champs de même forme ; complète avec les défauts de la cible",
        fill_optional_defaults=True,
    ),
    "balanced": MigrationStrategy(
        name="balanced",
        description="Reports directs et transformations structurelles (boutons ⇄ liste de boutons)",
        allow_structural=True,
    ),
    "flexible": MigrationStrategy(
        name="flexible",
        description="Maximise la conservation du contenu avec des conversions best-effort",
        allow_structural=True,
        allow_coercion=True,
    ),
}


def get_strategy(name=None) -> MigrationStrategy:
    """Retourne la stratégie par nom (défaut : config.DEFAULT_STRATEGY)."""
    if isinstance(name, MigrationStrategy):
        return name
    key = name or config.DEFAULT_STRATEGY
    try:
        return _STRATEGIES[key]
    except (KeyError, TypeError):
        raise UnknownStrategyError(key, list(_STRATEGIES)) from None


def list_strategies() -> List[MigrationStrategy]:
    return list(_STRATEGIES.values())


def register_strategy(strategy: MigrationStrategy) -> MigrationStrategy:
    """Enregistre une stratégie au démarrage ; un nom existant n'est jamais écrasé."""
    if strategy.name in _STRATEGIES:
        raise ValueError(f"Stratégie déjà enregistrée : {strategy.name!r}")
    _STRATEGIES[strategy.name] = strategy
    log.info("Stratégie de migration enregistrée : %s", strategy.name)
    return strategy
