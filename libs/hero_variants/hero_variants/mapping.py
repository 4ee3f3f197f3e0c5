"""
Field Mapper: correspondance des champs entre deux variantes.

Table de correspondance déclarative, pas de fonction par paire :
  - chaque unité de migration porte un rôle (title, button, media…) et une forme
    (text-block, button-list, gallery-list…)
  - deux unités de même rôle se correspondent, dans l'ordre de déclaration
  - la relation entre leurs formes donne le type de report :

      direct      même forme (éventuellement relocalisée)     title → content.title
      structural  changement de cardinalité / d'enveloppe    primaryButton → content.buttons
      coercion    conversion best-effort                     title → product.name

Les champs sans rôle (textAlign, layout, columns…) ne passent que si la cible
déclare le même chemin avec la même forme.
"""
import copy
import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .registry import FieldSpec, VariantSchema

log = logging.getLogger(__name__)

MappingKind = Literal["direct", "structural", "coercion", "none"]

# Valeur impossible à convertir (ex : image → vidéo)
UNCONVERTIBLE = object()

_STRUCTURAL = {
    frozenset({"button", "button-list"}),
    frozenset({"media-list", "gallery-list"}),
}

_COERCIONS = {
    frozenset({"plain-text", "text-block"}),
    frozenset({"media", "video"}),
    frozenset({"media", "media-list"}),
    frozenset({"media", "gallery-list"}),
    frozenset({"video", "media-list"}),
    frozenset({"video", "gallery-list"}),
    frozenset({"feature-list", "service-list"}),
}

_VIDEO_ONLY_KEYS = ("autoplay", "loop", "muted", "controls", "poster")


class FieldMapping(BaseModel):
    """Correspondance statique d'une unité source vers la cible."""
    model_config = ConfigDict(frozen=True)

    source: str
    target: Optional[str] = None
    kind: MappingKind = "none"
    source_shape: str = "value"
    target_shape: Optional[str] = None


def shape_relation(source_shape: str, target_shape: str) -> MappingKind:
    if source_shape == target_shape:
        return "direct"
    pair = frozenset({source_shape, target_shape})
    if pair in _STRUCTURAL:
        return "structural"
    if pair in _COERCIONS:
        return "coercion"
    return "none"


def is_allowed(kind: MappingKind, strategy) -> bool:
    if kind == "direct":
        return True
    if kind == "structural":
        return strategy.allow_structural
    if kind == "coercion":
        return strategy.allow_coercion
    return False


def _mapping(source: FieldSpec, target: Optional[FieldSpec] = None,
             kind: Optional[MappingKind] = None) -> FieldMapping:
    if target is None:
        return FieldMapping(source=source.path, source_shape=source.shape)
    return FieldMapping(
        source=source.path,
        target=target.path,
        kind=kind or shape_relation(source.shape, target.shape),
        source_shape=source.shape,
        target_shape=target.shape,
    )


def _options_compatible(source: FieldSpec, target: FieldSpec) -> bool:
    if target.options is None:
        return True
    if source.options is None:
        return False
    return set(source.options) <= set(target.options)


def _button_plan(source_units: List[FieldSpec], target_units: List[FieldSpec]) -> List[FieldMapping]:
    """Plan statique des boutons : liste cible si elle existe, sinon emplacements dans l'ordre."""
    list_slot = next((t for t in target_units if t.shape == "button-list"), None)
    if list_slot is not None:
        return [_mapping(s, list_slot) for s in source_units]

    plans = []
    slots = list(target_units)
    for spec in source_units:
        if not slots:
            plans.append(_mapping(spec))
            continue
        plans.append(_mapping(spec, slots[0]))
        if spec.shape == "button-list":
            # une liste peut remplir tous les emplacements restants
            slots = []
        else:
            slots.pop(0)
    return plans


def plan_mapping(source: VariantSchema, target: VariantSchema) -> List[FieldMapping]:
    """
    Correspondance de chaque unité source vers la cible (indépendante des valeurs).

    Returns:
        Une FieldMapping par unité source, dans l'ordre de déclaration
    """
    source_units = source.mapping_fields()
    target_units = target.mapping_fields()
    plans: Dict[str, FieldMapping] = {}

    roles = []
    for spec in source_units:
        if spec.role and spec.role not in roles:
            roles.append(spec.role)

    for role in roles:
        src = [s for s in source_units if s.role == role]
        tgt = [t for t in target_units if t.role == role]
        if role == "button":
            for plan in _button_plan(src, tgt):
                plans[plan.source] = plan
            continue
        for index, spec in enumerate(src):
            plans[spec.path] = _mapping(spec, tgt[index]) if index < len(tgt) else _mapping(spec)

    for spec in source_units:
        if spec.role:
            continue
        twin = target.field(spec.path)
        if (twin is not None and twin.role is None and twin.shape == spec.shape
                and twin.type == spec.type and _options_compatible(spec, twin)):
            plans[spec.path] = _mapping(spec, twin, "direct")
        else:
            plans[spec.path] = _mapping(spec)

    return [plans[spec.path] for spec in source_units]


def lost_fields(source: VariantSchema, target: VariantSchema) -> List[str]:
    """Unités source sans aucun équivalent dans la cible."""
    return [p.source for p in plan_mapping(source, target) if p.kind == "none"]


# ── Conversion des valeurs ───────────────────────────────────────────────────

def _as_media(value: dict) -> dict:
    media = copy.deepcopy(value)
    for key in _VIDEO_ONLY_KEYS:
        media.pop(key, None)
    return media


def _as_video(value: dict, target_default: Any) -> Any:
    if value.get("type") != "video":
        return UNCONVERTIBLE
    video = copy.deepcopy(value)
    playback = target_default if isinstance(target_default, dict) else {}
    for key in ("autoplay", "loop", "muted", "controls"):
        video.setdefault(key, playback.get(key, key != "controls"))
    return video


def _gallery_item(media: dict, index: int) -> dict:
    item = {"id": media.get("id") or f"item-{index + 1}", "image": media}
    if media.get("caption"):
        item["caption"] = media["caption"]
    return item


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return UNCONVERTIBLE


def _text_block(value: str, target_default: Any) -> dict:
    tag = target_default.get("tag", "p") if isinstance(target_default, dict) else "p"
    return {"text": value, "tag": tag}


def convert_value(value: Any, source_shape: str, target_shape: str, target_default: Any = None) -> Any:
    """
    Convertit une valeur d'une forme vers une autre.

    Returns:
        La nouvelle valeur (copie profonde) ou UNCONVERTIBLE
    """
    if source_shape == target_shape:
        return copy.deepcopy(value)

    if target_shape == "text-block" and source_shape == "plain-text":
        return _text_block(value, target_default) if isinstance(value, str) else UNCONVERTIBLE
    if target_shape == "plain-text" and source_shape == "text-block":
        return value.get("text", "") if isinstance(value, dict) else UNCONVERTIBLE

    if target_shape == "button-list" and source_shape == "button":
        return [copy.deepcopy(value)]
    if target_shape == "button" and source_shape == "button-list":
        first = _first(value)
        return copy.deepcopy(first) if first is not UNCONVERTIBLE else first

    if source_shape in ("media-list", "gallery-list", "media", "video"):
        return _convert_media(value, source_shape, target_shape, target_default)

    if source_shape == "feature-list" and target_shape == "service-list":
        return [copy.deepcopy(item) for item in value]
    if source_shape == "service-list" and target_shape == "feature-list":
        return [{k: copy.deepcopy(v) for k, v in item.items() if k != "features"} for item in value]

    return UNCONVERTIBLE


def _convert_media(value: Any, source_shape: str, target_shape: str, target_default: Any) -> Any:
    # ramène d'abord la source à une liste de médias simples
    if source_shape == "gallery-list":
        medias = [copy.deepcopy(item["image"]) for item in value if isinstance(item, dict) and "image" in item]
    elif source_shape == "media-list":
        medias = [copy.deepcopy(m) for m in value]
    elif isinstance(value, dict):
        medias = [_as_media(value) if source_shape == "video" else copy.deepcopy(value)]
    else:
        return UNCONVERTIBLE

    if target_shape == "media-list":
        return medias
    if target_shape == "gallery-list":
        return [_gallery_item(m, i) for i, m in enumerate(medias)]
    first = _first(medias)
    if first is UNCONVERTIBLE:
        return first
    if target_shape == "media":
        return first
    if target_shape == "video":
        if source_shape == "video":
            return copy.deepcopy(value)
        return _as_video(first, target_default)
    return UNCONVERTIBLE


def stripped_paths(value: Any, source_shape: str, target_shape: str, source_path: str) -> List[str]:
    """Sous-contenus source que convert_value ne reporte pas (features de services, poster vidéo)."""
    if source_shape == "service-list" and target_shape == "feature-list" and isinstance(value, list):
        return [
            f"{source_path}[{i}].features"
            for i, item in enumerate(value)
            if isinstance(item, dict) and item.get("features")
        ]
    if source_shape == "video" and target_shape != "video" and isinstance(value, dict) and value.get("poster"):
        return [f"{source_path}.poster"]
    return []
