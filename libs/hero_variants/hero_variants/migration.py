"""
Migrator: change un bloc hero de variante sans perte silencieuse.

Pipeline :
  1. Résolution des schémas source / cible et de la stratégie
  2. Descripteurs partagés (theme, responsive, accessibility, animation) reportés tels quels
  3. Boutons : "le premier bouton non vide gagne", emplacements remplis dans l'ordre
  4. Autres unités : table de correspondance (mapping.plan_mapping) filtrée par la stratégie
  5. Champs requis non remplis → défaut de la cible (added_defaults)
  6. Réparation : validation Pydantic, tout champ fautif est remis à son défaut

Le rapport (migrated / transformed / dropped) couvre toutes les unités présentes
dans la source. migrate() ne lève jamais pour une variante ou une stratégie
inconnue : success=False et errors renseigné.
"""
import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .compatibility import CompatibilityVerdict, classify
from .defaults import default_accessibility, default_responsive, default_theme
from .errors import HeroVariantError, UnknownStrategyError, UnknownVariantError
from .mapping import UNCONVERTIBLE, convert_value, is_allowed, plan_mapping, stripped_paths
from .models import CamelModel, VariantId
from .paths import delete_path, get_path, has_path, path_exists, set_path, split_path
from .registry import REGISTRY, FieldSpec, VariantSchema
from .strategies import MigrationStrategy, get_strategy

log = logging.getLogger(__name__)

_SHARED = {
    "theme":         default_theme,
    "responsive":    default_responsive,
    "accessibility": default_accessibility,
    "animation":     None,
}

_REVIEW_HINT = "Vérifiez le contenu migré avant de publier la page"


class MigrationReport(CamelModel):
    source_variant: Optional[str] = None
    target_variant: Optional[str] = None
    migrated_properties: List[str] = []
    transformed_properties: List[str] = []
    dropped_properties: List[str] = []
    added_defaults: List[str] = []
    warnings: List[str] = []
    recommendations: List[str] = []


class MigrationResult(CamelModel):
    migrated_props: Optional[Dict[str, Any]] = None
    success: bool = True
    migrated_properties: List[str] = []
    transformed_properties: List[str] = []
    dropped_properties: List[str] = []
    added_defaults: List[str] = []
    warnings: List[str] = []
    errors: List[str] = []
    source_variant: Optional[str] = None
    target_variant: Optional[str] = None
    recommendations: List[str] = []

    def report(self) -> MigrationReport:
        return MigrationReport(
            source_variant=self.source_variant,
            target_variant=self.target_variant,
            migrated_properties=list(self.migrated_properties),
            transformed_properties=list(self.transformed_properties),
            dropped_properties=list(self.dropped_properties),
            added_defaults=list(self.added_defaults),
            warnings=list(self.warnings),
            recommendations=list(self.recommendations),
        )


class _Migration:
    """État d'une migration en cours (une instance par appel)."""

    def __init__(self, instance: dict, source: VariantSchema, target: VariantSchema,
                 strategy: MigrationStrategy):
        self.instance = instance
        self.source = source
        self.target = target
        self.strategy = strategy
        self.block: Dict[str, Any] = {"id": instance.get("id"), "variant": target.variant.value}
        self.migrated: List[str] = []
        self.transformed: List[str] = []
        self.dropped: List[str] = []
        self.added: List[str] = []
        self.warnings: List[str] = []
        # chemin cible → chemins source qui l'ont rempli
        self.origins: Dict[str, List[str]] = {}

    # ── Comptabilité ─────────────────────────────────────────────────────────

    def _fill(self, target_path: str, value: Any, source_path: str, bucket: List[str]) -> None:
        set_path(self.block, target_path, value)
        self.origins.setdefault(target_path, []).append(source_path)
        if source_path not in bucket:
            bucket.append(source_path)

    def _drop(self, source_path: str, warning: Optional[str] = None) -> None:
        if source_path not in self.dropped:
            self.dropped.append(source_path)
        if warning:
            self.warnings.append(warning)

    def _filled(self, target_path: str) -> bool:
        return target_path in self.origins or has_path(self.block, target_path)

    # ── Étapes ───────────────────────────────────────────────────────────────

    def carry_shared(self) -> None:
        for key, factory in _SHARED.items():
            if self.instance.get(key) is not None or (key in self.instance and factory is None):
                self._fill(key, copy.deepcopy(self.instance[key]), key, self.migrated)
            elif factory is not None:
                set_path(self.block, key, factory())
                self.added.append(key)

    def account_unknown(self) -> None:
        """Clés source hors schéma (ex : primary_button) : abandonnées et signalées."""
        known = {"id", "variant", *_SHARED}
        known.update(str(split_path(spec.path)[0]) for spec in self.source.mapping_fields())
        for key in self.instance:
            if key not in known:
                self._drop(key, (
                    f"Clé « {key} » ignorée : absente du schéma {self.source.variant.value}"
                ))

    def carry_identity(self) -> None:
        """Même variante : copie intégrale, None explicites compris."""
        for spec in self.source.mapping_fields():
            if path_exists(self.instance, spec.path):
                self._fill(spec.path, copy.deepcopy(get_path(self.instance, spec.path)),
                           spec.path, self.migrated)

    def carry_buttons(self) -> None:
        units = [s for s in self.source.mapping_fields() if s.role == "button"]
        slots = [t for t in self.target.mapping_fields() if t.role == "button"]
        list_slot = next((t for t in slots if t.shape == "button-list"), None)

        # (chemin source, chemin rapporté, bouton, forme source)
        buttons: List[Tuple[str, str, dict, str]] = []
        for spec in units:
            value = get_path(self.instance, spec.path)
            if value is None:
                continue
            if spec.shape == "button-list":
                items = [(f"{spec.path}[{i}]", b) for i, b in enumerate(value if isinstance(value, list) else [])]
                if not items:
                    self._drop(spec.path)
            else:
                items = [(spec.path, value)]
            for reported, btn in items:
                if not isinstance(btn, dict) or not str(btn.get("text", "")).strip():
                    self._drop(reported)
                    continue
                buttons.append((spec.path, reported, btn, spec.shape))

        if list_slot is not None:
            self._buttons_to_list(buttons, list_slot)
        else:
            self._buttons_to_slots(buttons, [s for s in slots if s.shape == "button"])
        self._collapse_list_units(units)

    def _buttons_to_list(self, buttons, list_slot: FieldSpec) -> None:
        carried = []
        for unit, reported, btn, shape in buttons:
            kind = "direct" if shape == "button-list" else "structural"
            if not is_allowed(kind, self.strategy):
                self._drop(reported, self._refused(reported, kind))
                continue
            carried.append(copy.deepcopy(btn))
            self.origins.setdefault(list_slot.path, []).append(unit)
            bucket = self.migrated if kind == "direct" else self.transformed
            if unit not in bucket:
                bucket.append(unit)
        if carried:
            set_path(self.block, list_slot.path, carried)

    def _buttons_to_slots(self, buttons, slots: List[FieldSpec]) -> None:
        free = list(slots)
        for unit, reported, btn, shape in buttons:
            kind = "direct" if shape == "button" else "structural"
            if free and not is_allowed(kind, self.strategy):
                self._drop(reported, self._refused(reported, kind))
                continue
            if not free:
                self._drop(reported, (
                    f"Bouton « {btn.get('text')} » ({reported}) supprimé : aucun emplacement "
                    f"disponible dans la variante {self.target.variant.value}"
                ))
                continue
            slot = free.pop(0)
            self._fill(slot.path, copy.deepcopy(btn), unit,
                       self.migrated if kind == "direct" else self.transformed)

    def _collapse_list_units(self, units: List[FieldSpec]) -> None:
        """Liste source entièrement perdue → le chemin de l'unité remplace ses index."""
        for spec in units:
            if spec.shape != "button-list" or spec.path in self.migrated or spec.path in self.transformed:
                continue
            indexed = [p for p in self.dropped if p.startswith(f"{spec.path}[")]
            if indexed:
                self.dropped = [p for p in self.dropped if p not in indexed]
                self._drop(spec.path)

    def carry_fields(self) -> None:
        for plan in plan_mapping(self.source, self.target):
            spec = self.source.field(plan.source)
            if spec.role == "button" or not has_path(self.instance, plan.source):
                continue
            if plan.kind == "none" or plan.target is None:
                self._drop(plan.source, (
                    f"Champ « {plan.source} » abandonné : aucun équivalent dans la variante "
                    f"{self.target.variant.value}"
                ))
                continue
            if not is_allowed(plan.kind, self.strategy):
                self._drop(plan.source, self._refused(plan.source, plan.kind))
                continue

            target_spec = self.target.field(plan.target)
            value = convert_value(get_path(self.instance, plan.source), plan.source_shape,
                                  plan.target_shape, target_spec.default)
            if value is UNCONVERTIBLE or (target_spec.options is not None and value not in target_spec.options):
                self._drop(plan.source, (
                    f"Champ « {plan.source} » abandonné : valeur incompatible avec "
                    f"{plan.target} ({self.target.variant.value})"
                ))
                continue
            bucket = self.migrated if plan.kind == "direct" else self.transformed
            self._fill(plan.target, value, plan.source, bucket)
            for lost in stripped_paths(get_path(self.instance, plan.source), plan.source_shape,
                                       plan.target_shape, plan.source):
                self._drop(lost, (
                    f"Contenu « {lost} » abandonné : non représentable dans "
                    f"{plan.target} ({self.target.variant.value})"
                ))
            log.debug("%s → %s (%s)", plan.source, plan.target, plan.kind)

    def fill_defaults(self, optional: bool = True) -> None:
        for spec in self.target.mapping_fields():
            if self._filled(spec.path) or spec.default is None:
                continue
            if spec.required or (optional and self.strategy.fill_optional_defaults):
                set_path(self.block, spec.path, copy.deepcopy(spec.default))
                self.added.append(spec.path)

    def _refused(self, path: str, kind: str) -> str:
        needed = "balanced" if kind == "structural" else "flexible"
        return (
            f"Champ « {path} » abandonné : la stratégie {self.strategy.name} n'autorise pas "
            f"cette conversion (essayez {needed})"
        )

    # ── Réparation ───────────────────────────────────────────────────────────

    def _unit_for(self, loc: Tuple[Any, ...]) -> Optional[FieldSpec]:
        best = None
        for spec in self.target.mapping_fields():
            segments = split_path(spec.path)
            if tuple(loc[:len(segments)]) == tuple(segments):
                if best is None or len(segments) > len(split_path(best.path)):
                    best = spec
        return best

    def _reset_unit(self, spec: FieldSpec) -> None:
        sources = self.origins.pop(spec.path, [])
        if spec.required or spec.path in self.added:
            set_path(self.block, spec.path, copy.deepcopy(spec.default))
            if spec.path not in self.added:
                self.added.append(spec.path)
        else:
            delete_path(self.block, spec.path)
        for source_path in sources:
            for bucket in (self.migrated, self.transformed):
                if source_path in bucket:
                    bucket.remove(source_path)
            self._drop(source_path, (
                f"Champ « {source_path} » réinitialisé : valeur non conforme au schéma "
                f"{self.target.variant.value}"
            ))
        log.warning("Champ %s réparé (variante %s)", spec.path, self.target.variant.value)

    def _reset_shared(self, key: str) -> None:
        factory = _SHARED[key]
        self.origins.pop(key, None)
        if key in self.migrated:
            self.migrated.remove(key)
        self._drop(key, f"Descripteur « {key} » réinitialisé : valeur non conforme")
        if factory is None:
            self.block.pop(key, None)
        else:
            self.block[key] = factory()
            self.added.append(key)

    def repair(self) -> None:
        model = self.target.block_model
        limit = len(self.target.mapping_fields()) + len(_SHARED) + 2
        for _ in range(limit):
            try:
                model.model_validate(self.block)
                return
            except ValidationError as exc:
                errors = exc.errors()
            handled = set()
            for err in errors:
                loc = tuple(err["loc"])
                if not loc:
                    continue
                head = loc[0]
                if head in handled:
                    continue
                if err["type"] == "extra_forbidden":
                    delete_path(self.block, _join(loc))
                    self.warnings.append(
                        f"Clé « {_join(loc)} » supprimée : absente du schéma {self.target.variant.value}"
                    )
                elif head == "id":
                    self.block["id"] = REGISTRY.default_instance(self.target.variant)["id"]
                elif head in _SHARED:
                    self._reset_shared(head)
                    handled.add(head)
                else:
                    spec = self._unit_for(loc)
                    if spec is None:
                        delete_path(self.block, _join(loc))
                    elif spec.path not in handled:
                        self._reset_unit(spec)
                        handled.add(spec.path)
        raise HeroVariantError(
            f"Impossible de produire un bloc {self.target.variant.value} conforme après réparation"
        )

    def result(self, verdict: Optional[CompatibilityVerdict]) -> MigrationResult:
        recommendations = list(verdict.recommendations) if verdict else []
        if (self.dropped or self.transformed) and _REVIEW_HINT not in recommendations:
            recommendations.append(_REVIEW_HINT)
        return MigrationResult(
            migrated_props=self.block,
            success=True,
            migrated_properties=self.migrated,
            transformed_properties=self.transformed,
            dropped_properties=self.dropped,
            added_defaults=self.added,
            warnings=self.warnings,
            source_variant=self.source.variant.value,
            target_variant=self.target.variant.value,
            recommendations=recommendations,
        )


def _join(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _failure(message: str, source=None, target=None) -> MigrationResult:
    log.warning("Migration impossible : %s", message)
    return MigrationResult(
        migrated_props=None,
        success=False,
        errors=[message],
        source_variant=str(source.value if isinstance(source, VariantId) else source) if source else None,
        target_variant=str(target.value if isinstance(target, VariantId) else target) if target else None,
    )


def migrate(instance: dict, target, strategy=None) -> MigrationResult:
    """
    Migre un bloc hero vers une autre variante.

    Args:
        instance: bloc source (jamais modifié)
        target:   VariantId ou identifiant ("split-screen"…)
        strategy: nom, MigrationStrategy ou None (config.DEFAULT_STRATEGY)

    Returns:
        MigrationResult (success=False si variante ou stratégie inconnue)
    """
    source_id = instance.get("variant") if isinstance(instance, dict) else None
    try:
        source_schema = REGISTRY.get(source_id)
        target_schema = REGISTRY.get(target)
        policy = get_strategy(strategy)
    except (UnknownVariantError, UnknownStrategyError) as exc:
        return _failure(str(exc), source_id, target)

    run = _Migration(instance, source_schema, target_schema, policy)
    run.carry_shared()
    run.account_unknown()
    if source_schema.variant == target_schema.variant:
        run.carry_identity()
        verdict = None
    else:
        run.carry_buttons()
        run.carry_fields()
        verdict = classify(source_schema.variant, target_schema.variant)
    run.fill_defaults(optional=source_schema.variant != target_schema.variant)
    run.repair()

    result = run.result(verdict)
    log.info(
        "Migration %s → %s (%s) : %d migrés, %d transformés, %d abandonnés",
        result.source_variant, result.target_variant, policy.name,
        len(result.migrated_properties), len(result.transformed_properties),
        len(result.dropped_properties),
    )
    return result


def preview_migration(instance: dict, target, strategy=None) -> Tuple[Optional[CompatibilityVerdict], MigrationResult]:
    """Verdict de compatibilité + résultat de la migration, sans rien modifier."""
    result = migrate(instance, target, strategy)
    if not result.success:
        return None, result
    return classify(result.source_variant, result.target_variant), result


def batch_migrate(instances: List[dict], target, strategy=None) -> List[MigrationResult]:
    return [migrate(instance, target, strategy) for instance in instances]
