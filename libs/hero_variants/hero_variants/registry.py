"""
Registry des variantes hero: catalogue statique des dix schémas.

Chaque VariantSchema porte :
  - le modèle Pydantic de la variante (conformité exacte)
  - la liste des champs (chemin, type sémantique, requis, défaut, rôle, forme)
  - les règles de visibilité (champ A visible si champ B remplit une condition)

Le registry est construit une seule fois à l'import puis n'est plus modifié ;
un auto-contrôle lève SchemaValidationError si un schéma est incohérent.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .defaults import build_default_instance, content_factory
from .errors import SchemaValidationError, UnknownVariantError
from .models import VARIANT_MODELS, BaseHero, HeroBlock, VariantId, coerce_variant
from .paths import get_path, has_path, parent_paths

log = logging.getLogger(__name__)

FieldType = Literal["text", "url", "color", "number", "boolean", "media", "list", "record", "select"]

# Rôle sémantique d'un champ : deux champs de même rôle se correspondent
# d'une variante à l'autre (title ↔ content.title ↔ product.name…)
Role = Literal["title", "subtitle", "description", "button", "background", "media", "items", "highlights"]

# Forme de la valeur : décide si le report est direct, structurel ou une coercition
Shape = Literal[
    "value", "text-block", "plain-text", "button", "button-list", "background",
    "media", "video", "media-list", "gallery-list", "feature-list", "service-list",
    "testimonial-list", "badge-list", "string-list", "overlay", "record",
]

Condition = Literal["equals", "not-equals", "contains", "not-contains", "greater", "less"]


class FieldSpec(BaseModel):
    """Métadonnées d'un champ (éditeur + migration)."""
    model_config = ConfigDict(frozen=True)

    path: str
    type: FieldType
    label: str
    required: bool = False
    # défaut figé en JSON : chaque lecture de `default` rend un graphe neuf
    default_json: Optional[str] = None
    options: Optional[Tuple[Any, ...]] = None
    role: Optional[Role] = None
    shape: Shape = "value"

    @property
    def default(self) -> Any:
        return None if self.default_json is None else json.loads(self.default_json)


class FieldDependency(BaseModel):
    """`field` n'est pertinent que si `depends_on` remplit `condition`."""
    model_config = ConfigDict(frozen=True)

    field: str
    depends_on: str
    condition: Condition = "equals"
    value: Any = None
    action: Literal["show", "hide", "enable", "disable", "require"] = "show"


class VariantSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: VariantId
    name: str
    description: str
    tags: Tuple[str, ...] = ()
    block_model: Type[BaseHero]
    fields: Tuple[FieldSpec, ...]
    dependencies: Tuple[FieldDependency, ...] = ()

    def field(self, path: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.path == path:
                return spec
        return None

    def mapping_fields(self) -> List[FieldSpec]:
        """Unités de migration : champs sans ancêtre déclaré (background.type exclu)."""
        declared = {spec.path for spec in self.fields}
        return [
            spec for spec in self.fields
            if not any(parent in declared for parent in parent_paths(spec.path))
        ]

    def fields_with_role(self, role: str) -> List[FieldSpec]:
        return [spec for spec in self.mapping_fields() if spec.role == role]

    def required_paths(self) -> List[str]:
        return [spec.path for spec in self.mapping_fields() if spec.required]


# ── Briques de déclaration ───────────────────────────────────────────────────

def _f(path: str, type_: str, label: str, required: bool = False, role: Optional[str] = None,
       shape: str = "value", options: Optional[tuple] = None) -> FieldSpec:
    return FieldSpec(path=path, type=type_, label=label, required=required,
                     role=role, shape=shape, options=options)


def _text(path: str, label: str, role: Optional[str], required: bool = False) -> FieldSpec:
    return _f(path, "text", label, required, role, "text-block")


def _title(path: str = "title") -> FieldSpec:
    return _text(path, "Titre", "title", required=True)


def _subtitle(path: str = "subtitle") -> FieldSpec:
    return _text(path, "Sous-titre", "subtitle")


def _description(path: str = "description") -> FieldSpec:
    return _text(path, "Description", "description")


def _button(path: str, label: str, required: bool = False) -> List[FieldSpec]:
    return [
        _f(path, "record", label, required, "button", "button"),
        _f(f"{path}.text", "text", f"{label} : texte"),
        _f(f"{path}.url", "url", f"{label} : URL"),
    ]


def _button_rule(path: str) -> FieldDependency:
    return FieldDependency(field=f"{path}.url", depends_on=f"{path}.text",
                           condition="not-equals", value="")


def _select(path: str, label: str, options: tuple) -> FieldSpec:
    return _f(path, "select", label, True, options=options)


def _flag(path: str, label: str) -> FieldSpec:
    return _f(path, "boolean", label, True)


_BACKGROUND_FIELDS = [
    _f("background", "record", "Fond", True, "background", "background"),
    _f("background.type", "select", "Type de fond",
       options=("none", "color", "gradient", "image", "video")),
    _f("background.color", "color", "Couleur de fond"),
    _f("background.image", "media", "Image de fond"),
    _f("background.video", "media", "Vidéo de fond"),
]

_BACKGROUND_RULES = [
    FieldDependency(field="background.color", depends_on="background.type", value="color"),
    FieldDependency(field="background.image", depends_on="background.type", value="image"),
    FieldDependency(field="background.video", depends_on="background.type", value="video"),
]

_ALIGN = ("start", "center", "end")


# ── Les dix schémas ──────────────────────────────────────────────────────────

def _schemas() -> List[VariantSchema]:
    return [
        VariantSchema(
            variant=VariantId.CENTERED,
            name="Hero Centered",
            description="Traditional centered hero with title, subtitle, and call-to-action buttons",
            tags=("hero", "centered", "landing", "cta", "traditional"),
            block_model=VARIANT_MODELS[VariantId.CENTERED],
            fields=(
                _title(), _subtitle(), _description(),
                *_button("primaryButton", "Bouton principal"),
                *_button("secondaryButton", "Bouton secondaire"),
                *_BACKGROUND_FIELDS,
                _select("textAlign", "Alignement du texte", ("left", "center", "right")),
            ),
            dependencies=(
                _button_rule("primaryButton"), _button_rule("secondaryButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.SPLIT_SCREEN,
            name="Hero Split Screen",
            description="Two-column layout with content on one side and media on the other",
            tags=("hero", "split-screen", "two-column", "media", "modern"),
            block_model=VARIANT_MODELS[VariantId.SPLIT_SCREEN],
            fields=(
                _title("content.title"), _subtitle("content.subtitle"), _description("content.description"),
                _f("content.buttons", "list", "Boutons", True, "button", "button-list"),
                _f("media", "media", "Média", True, "media", "media"),
                _select("layout", "Position du contenu", ("left", "right")),
                _select("contentAlignment", "Alignement du contenu", _ALIGN),
                _select("mediaAlignment", "Alignement du média", _ALIGN),
                *_BACKGROUND_FIELDS,
            ),
            dependencies=tuple(_BACKGROUND_RULES),
        ),
        VariantSchema(
            variant=VariantId.VIDEO,
            name="Hero Video",
            description="Full-screen video background with overlay content",
            tags=("hero", "video", "background", "multimedia", "engaging"),
            block_model=VARIANT_MODELS[VariantId.VIDEO],
            fields=(
                _f("video", "media", "Vidéo de fond", True, "media", "video"),
                _f("video.poster", "url", "Image d'attente"),
                _f("video.autoplay", "boolean", "Lecture automatique"),
                _f("video.loop", "boolean", "Boucle"),
                _f("video.muted", "boolean", "Muet"),
                _f("overlay", "record", "Overlay", True, shape="overlay"),
                _f("overlay.enabled", "boolean", "Activer l'overlay"),
                _f("overlay.color", "color", "Couleur de l'overlay"),
                _f("overlay.opacity", "number", "Opacité de l'overlay"),
                _title("content.title"), _subtitle("content.subtitle"), _description("content.description"),
                _f("content.buttons", "list", "Boutons", True, "button", "button-list"),
                _select("content.position", "Position du contenu",
                        ("center", "top-left", "top-right", "bottom-left", "bottom-right")),
            ),
            dependencies=(
                FieldDependency(field="overlay.color", depends_on="overlay.enabled", value=True),
                FieldDependency(field="overlay.opacity", depends_on="overlay.enabled", value=True),
            ),
        ),
        VariantSchema(
            variant=VariantId.MINIMAL,
            name="Hero Minimal",
            description="Clean, typography-focused design with minimal elements",
            tags=("hero", "minimal", "clean", "typography", "simple"),
            block_model=VARIANT_MODELS[VariantId.MINIMAL],
            fields=(
                _title(), _subtitle(),
                *_button("button", "Bouton"),
                *_BACKGROUND_FIELDS,
                _select("spacing", "Espacement", ("compact", "normal", "spacious")),
            ),
            dependencies=(_button_rule("button"), *_BACKGROUND_RULES),
        ),
        VariantSchema(
            variant=VariantId.FEATURE,
            name="Hero Feature",
            description="Showcase key features or benefits prominently",
            tags=("hero", "features", "benefits", "grid", "showcase"),
            block_model=VARIANT_MODELS[VariantId.FEATURE],
            fields=(
                _title(), _subtitle(), _description(),
                _f("features", "list", "Fonctionnalités", True, "items", "feature-list"),
                _select("layout", "Disposition", ("grid", "list", "carousel")),
                _select("columns", "Colonnes", (2, 3, 4)),
                *_BACKGROUND_FIELDS,
                *_button("primaryButton", "Bouton principal"),
            ),
            dependencies=(
                FieldDependency(field="columns", depends_on="layout", value="grid"),
                _button_rule("primaryButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.TESTIMONIAL,
            name="Hero Testimonial",
            description="Social proof integration with customer testimonials and ratings",
            tags=("hero", "testimonial", "social-proof", "reviews", "customers"),
            block_model=VARIANT_MODELS[VariantId.TESTIMONIAL],
            fields=(
                _title(), _subtitle(),
                _f("testimonials", "list", "Témoignages", True, shape="testimonial-list"),
                _select("layout", "Disposition", ("single", "carousel", "grid")),
                _flag("autoRotate", "Rotation automatique"),
                _f("rotationInterval", "number", "Intervalle de rotation (ms)", True),
                _flag("showRatings", "Afficher les notes"),
                *_BACKGROUND_FIELDS,
                *_button("primaryButton", "Bouton principal"),
            ),
            dependencies=(
                FieldDependency(field="autoRotate", depends_on="layout", condition="not-equals", value="grid"),
                FieldDependency(field="rotationInterval", depends_on="autoRotate", value=True),
                _button_rule("primaryButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.PRODUCT,
            name="Hero Product",
            description="Product showcase with gallery functionality and e-commerce features",
            tags=("hero", "product", "e-commerce", "gallery", "showcase"),
            block_model=VARIANT_MODELS[VariantId.PRODUCT],
            fields=(
                _f("product.id", "text", "Identifiant produit", True),
                _f("product.name", "text", "Nom du produit", True, "title", "plain-text"),
                _f("product.description", "text", "Description du produit", True, "description", "plain-text"),
                _f("product.price", "text", "Prix"),
                _f("product.originalPrice", "text", "Prix barré"),
                _f("product.currency", "text", "Devise"),
                _f("product.images", "list", "Images", True, "media", "media-list"),
                _f("product.features", "list", "Points forts", role="highlights", shape="string-list"),
                _f("product.badge", "text", "Badge"),
                _f("product.link", "url", "Lien produit"),
                _select("layout", "Disposition", ("left", "right", "center")),
                _flag("showGallery", "Afficher la galerie"),
                _flag("showFeatures", "Afficher les points forts"),
                _flag("showPricing", "Afficher le prix"),
                *_BACKGROUND_FIELDS,
                *_button("primaryButton", "Bouton principal"),
                *_button("secondaryButton", "Bouton secondaire"),
            ),
            dependencies=(
                FieldDependency(field="product.price", depends_on="showPricing", value=True),
                FieldDependency(field="product.originalPrice", depends_on="showPricing", value=True),
                FieldDependency(field="product.features", depends_on="showFeatures", value=True),
                _button_rule("primaryButton"), _button_rule("secondaryButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.SERVICE,
            name="Hero Service",
            description="Service-oriented layout with trust indicators and value proposition",
            tags=("hero", "service", "business", "trust", "professional", "b2b"),
            block_model=VARIANT_MODELS[VariantId.SERVICE],
            fields=(
                _title(), _subtitle(), _description(),
                _f("services", "list", "Services", True, "items", "service-list"),
                _f("trustBadges", "list", "Badges de confiance", True, shape="badge-list"),
                _select("layout", "Disposition", ("grid", "list")),
                _flag("showTrustBadges", "Afficher les badges"),
                *_BACKGROUND_FIELDS,
                *_button("primaryButton", "Bouton principal"),
                *_button("contactButton", "Bouton contact"),
            ),
            dependencies=(
                FieldDependency(field="trustBadges", depends_on="showTrustBadges", value=True),
                _button_rule("primaryButton"), _button_rule("contactButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.CTA,
            name="Hero CTA",
            description="Conversion-focused hero section with prominent call-to-action elements and urgency indicators",
            tags=("hero", "cta", "conversion", "landing", "marketing", "urgency"),
            block_model=VARIANT_MODELS[VariantId.CTA],
            fields=(
                _title(), _subtitle(), _description(),
                *_button("primaryButton", "Bouton principal", required=True),
                *_button("secondaryButton", "Bouton secondaire"),
                _text("urgencyText", "Message d'urgence", None),
                _f("benefits", "list", "Bénéfices", role="highlights", shape="string-list"),
                *_BACKGROUND_FIELDS,
                _select("layout", "Disposition", ("center", "split")),
                _flag("showBenefits", "Afficher les bénéfices"),
            ),
            dependencies=(
                FieldDependency(field="benefits", depends_on="showBenefits", value=True),
                _button_rule("secondaryButton"), *_BACKGROUND_RULES,
            ),
        ),
        VariantSchema(
            variant=VariantId.GALLERY,
            name="Hero Gallery",
            description="Visual storytelling through image collections with lightbox and carousel functionality",
            tags=("hero", "gallery", "images", "lightbox", "carousel", "visual", "portfolio"),
            block_model=VARIANT_MODELS[VariantId.GALLERY],
            fields=(
                _title(), _subtitle(),
                _f("gallery", "list", "Galerie", True, "media", "gallery-list"),
                _select("layout", "Disposition", ("grid", "masonry", "carousel")),
                _select("columns", "Colonnes", (2, 3, 4, 5)),
                _flag("showCaptions", "Afficher les légendes"),
                _flag("lightbox", "Lightbox"),
                _flag("autoplay", "Défilement automatique"),
                _f("autoplayInterval", "number", "Intervalle de défilement (ms)", True),
                *_BACKGROUND_FIELDS,
                *_button("primaryButton", "Bouton principal"),
            ),
            dependencies=(
                FieldDependency(field="autoplayInterval", depends_on="autoplay", value=True),
                FieldDependency(field="columns", depends_on="layout", condition="not-equals", value="carousel"),
                _button_rule("primaryButton"), *_BACKGROUND_RULES,
            ),
        ),
    ]


def _with_defaults(schema: VariantSchema) -> VariantSchema:
    """Renseigne FieldSpec.default depuis l'instance par défaut de la variante."""
    factory = content_factory(schema.variant)
    if factory is None:
        return schema
    sample = factory()
    fields = []
    for spec in schema.fields:
        value = get_path(sample, spec.path)
        frozen = None if value is None else json.dumps(value)
        fields.append(spec.model_copy(update={"default_json": frozen}))
    return schema.model_copy(update={"fields": tuple(fields)})


# ── Évaluation des règles de visibilité ──────────────────────────────────────

def _condition_holds(rule: FieldDependency, actual: Any) -> bool:
    if rule.condition == "equals":
        return actual == rule.value
    if rule.condition == "not-equals":
        return actual != rule.value
    if rule.condition in ("contains", "not-contains"):
        found = isinstance(actual, (list, tuple, str)) and rule.value in actual
        return found if rule.condition == "contains" else not found
    if not isinstance(actual, (int, float)) or isinstance(actual, bool):
        return False
    if rule.condition == "greater":
        return actual > rule.value
    return actual < rule.value


def _format_errors(exc: ValidationError, strip: Optional[str] = None) -> List[str]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"]]
        if strip is not None and loc and loc[0] == strip:
            loc = loc[1:]
        errors.append(f"{'.'.join(loc) or '<bloc>'}: {err['msg']}")
    return errors


# ── Registry ─────────────────────────────────────────────────────────────────

class SchemaRegistry:
    """Catalogue en lecture seule des variantes hero."""

    def __init__(self, schemas: Iterable[VariantSchema]):
        self._schemas: Dict[VariantId, VariantSchema] = {s.variant: s for s in schemas}
        self._adapter = TypeAdapter(HeroBlock)

    def get(self, variant) -> VariantSchema:
        """Schéma d'une variante ; UnknownVariantError si absente."""
        key = coerce_variant(variant)
        if key is None or key not in self._schemas:
            raise UnknownVariantError(variant)
        return self._schemas[key]

    def default_instance(self, variant, block_id: Optional[str] = None) -> dict:
        """Instance neuve (graphe frais, nouvel identifiant si block_id absent)."""
        schema = self.get(variant)
        return build_default_instance(schema.variant, block_id)

    def all_variants(self) -> List[VariantId]:
        return list(self._schemas)

    def validate(self, schema: VariantSchema) -> List[str]:
        """
        Contrôle de cohérence d'un schéma.

        Returns:
            Liste d'erreurs (vide si le schéma est valide)
        """
        errors: List[str] = []
        variant = coerce_variant(getattr(schema, "variant", None))
        if variant is None:
            errors.append(f"Identifiant de variante invalide : {getattr(schema, 'variant', None)!r}")

        fields = getattr(schema, "fields", None) or ()
        if not fields:
            errors.append("La liste des champs est requise")
        paths = [spec.path for spec in fields]
        duplicates = sorted({p for p in paths if paths.count(p) > 1})
        if duplicates:
            errors.append(f"Champs déclarés plusieurs fois : {duplicates}")

        factory = content_factory(variant) if variant is not None else None
        if factory is None:
            errors.append("Instance par défaut absente")
        else:
            sample = build_default_instance(variant, "registry-check")
            try:
                schema.block_model.model_validate(sample)
            except ValidationError as exc:
                errors.extend(f"Instance par défaut : {e}" for e in _format_errors(exc))
            for spec in fields:
                if spec.required and not has_path(sample, spec.path):
                    errors.append(f"Champ requis sans défaut : {spec.path}")

        declared = set(paths)
        for rule in getattr(schema, "dependencies", None) or ():
            for ref in (rule.field, rule.depends_on):
                if ref not in declared:
                    errors.append(f"Règle de dépendance vers un champ non déclaré : {ref}")
        return errors

    def self_check(self) -> None:
        errors = []
        for variant in VariantId:
            if variant not in self._schemas:
                errors.append(f"{variant.value}: variante absente du registry")
        for schema in self._schemas.values():
            errors.extend(f"{schema.variant.value}: {e}" for e in self.validate(schema))
        if errors:
            raise SchemaValidationError(errors)
        log.debug("Registry hero valide (%d variantes)", len(self._schemas))

    def validate_instance(self, instance: Any) -> List[str]:
        """Conformité exacte d'un bloc à sa variante ; liste vide si conforme."""
        if not isinstance(instance, dict):
            return ["<bloc>: un objet JSON est attendu"]
        try:
            self._adapter.validate_python(instance)
        except ValidationError as exc:
            return _format_errors(exc, strip=str(instance.get("variant")))
        return []

    def parse(self, instance: dict) -> BaseHero:
        """Bloc JSON → modèle Pydantic de sa variante (ValidationError si invalide)."""
        return self._adapter.validate_python(instance)

    def visible_fields(self, instance: dict) -> List[str]:
        """Champs à afficher dans l'éditeur selon les règles show/hide."""
        schema = self.get(instance.get("variant"))
        visible = []
        for spec in schema.fields:
            rules = [r for r in schema.dependencies if r.field == spec.path]
            shown = all(
                _condition_holds(r, get_path(instance, r.depends_on))
                for r in rules if r.action == "show"
            )
            hidden = any(
                _condition_holds(r, get_path(instance, r.depends_on))
                for r in rules if r.action == "hide"
            )
            if shown and not hidden:
                visible.append(spec.path)
        return visible


def build_registry() -> SchemaRegistry:
    registry = SchemaRegistry(_with_defaults(s) for s in _schemas())
    registry.self_check()
    return registry


REGISTRY = build_registry()


# ── Raccourcis module ────────────────────────────────────────────────────────

def get_schema(variant) -> VariantSchema:
    return REGISTRY.get(variant)


def default_instance(variant, block_id: Optional[str] = None) -> dict:
    return REGISTRY.default_instance(variant, block_id)


def all_variants() -> List[VariantId]:
    return REGISTRY.all_variants()


def validate_schema(schema: VariantSchema) -> List[str]:
    return REGISTRY.validate(schema)


def validate_instance(instance: Any) -> List[str]:
    return REGISTRY.validate_instance(instance)
