"""
Compatibility Classifier: verdict statique pour les 100 paires ordonnées.

Le niveau de chaque paire est déclaré dans une grille (H / M / L) ; les
avertissements sont dérivés de la table de correspondance (champs source sans
équivalent dans la cible). La table complète est construite une fois à l'import.

  H → compatibilité high,   risque de perte low
  M → compatibilité medium, risque de perte medium
  L → compatibilité low,    risque de perte high
"""
import logging
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import UnknownVariantError
from .mapping import lost_fields
from .models import VariantId, coerce_variant
from .registry import REGISTRY

log = logging.getLogger(__name__)

Level = Literal["high", "medium", "low"]

_ORDER = [
    VariantId.CENTERED, VariantId.SPLIT_SCREEN, VariantId.VIDEO, VariantId.MINIMAL,
    VariantId.FEATURE, VariantId.TESTIMONIAL, VariantId.PRODUCT, VariantId.SERVICE,
    VariantId.CTA, VariantId.GALLERY,
]

# Ligne = source, colonne = cible (même ordre que _ORDER)
#                    cen  spl  vid  min  fea  tes  pro  ser  cta  gal
_GRID: Dict[VariantId, str] = {
    VariantId.CENTERED:     "H    H    M    M    M    M    L    M    H    L",
    VariantId.SPLIT_SCREEN: "M    H    M    M    M    M    L    M    H    M",
    VariantId.VIDEO:        "M    M    H    M    L    L    L    L    M    L",
    VariantId.MINIMAL:      "H    M    M    H    M    M    L    M    H    L",
    VariantId.FEATURE:      "M    M    L    M    H    M    L    H    M    M",
    VariantId.TESTIMONIAL:  "M    M    L    M    M    H    L    M    M    L",
    VariantId.PRODUCT:      "L    M    L    L    L    L    H    L    M    M",
    VariantId.SERVICE:      "M    M    L    M    H    M    L    H    M    L",
    VariantId.CTA:          "H    H    M    M    M    M    L    M    H    L",
    VariantId.GALLERY:      "L    M    L    L    M    L    M    L    L    H",
}

_TIERS: Dict[str, Tuple[Level, Level]] = {
    "H": ("high", "low"),
    "M": ("medium", "medium"),
    "L": ("low", "high"),
}

_RANK = {"high": 0, "medium": 1, "low": 2}


class CompatibilityVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: VariantId
    target: VariantId
    compatibility: Level
    data_loss_risk: Level
    warnings: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    is_supported: bool = True


def _verdict(source: VariantId, target: VariantId, tier: str) -> CompatibilityVerdict:
    compatibility, risk = _TIERS[tier]
    if source == target:
        return CompatibilityVerdict(source=source, target=target,
                                    compatibility=compatibility, data_loss_risk=risk)

    warnings: List[str] = []
    recommendations: List[str] = []
    lost = lost_fields(REGISTRY.get(source), REGISTRY.get(target))
    if lost:
        warnings.append(
            f"Champs sans équivalent dans la variante {target.value} : {', '.join(lost)}"
        )
    if compatibility == "low":
        warnings.append(
            f"Structures très différentes : une part importante du contenu {source.value} sera perdue"
        )
        recommendations.append("Envisagez de créer un nouveau bloc plutôt que de changer de variante")
        recommendations.append("Utilisez la stratégie flexible pour conserver un maximum de contenu")
    elif compatibility == "medium":
        recommendations.append("Utilisez la stratégie balanced pour réorganiser les boutons et médias")
    if lost and compatibility == "high":
        recommendations.append("Vérifiez les champs listés avant de publier")

    return CompatibilityVerdict(
        source=source,
        target=target,
        compatibility=compatibility,
        data_loss_risk=risk,
        warnings=tuple(warnings),
        recommendations=tuple(recommendations),
    )


def _build_table() -> Dict[Tuple[VariantId, VariantId], CompatibilityVerdict]:
    table = {}
    for source in _ORDER:
        tiers = _GRID[source].split()
        for target, tier in zip(_ORDER, tiers):
            table[(source, target)] = _verdict(source, target, tier)
    log.debug("Table de compatibilité construite (%d paires)", len(table))
    return table


_TABLE = _build_table()


def _resolve(variant) -> VariantId:
    key = coerce_variant(variant)
    if key is None:
        raise UnknownVariantError(variant)
    return key


def classify(source, target) -> CompatibilityVerdict:
    """Verdict de compatibilité pour une paire ; UnknownVariantError si inconnue."""
    return _TABLE[(_resolve(source), _resolve(target))]


def rank_targets(source) -> List[CompatibilityVerdict]:
    """Les autres variantes, de la plus à la moins compatible."""
    key = _resolve(source)
    others = [_TABLE[(key, target)] for target in _ORDER if target != key]
    return sorted(others, key=lambda v: (_RANK[v.compatibility], len(v.warnings)))
