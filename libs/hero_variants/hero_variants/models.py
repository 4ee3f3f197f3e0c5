"""
Schémas Pydantic des blocs hero.
Structure : HeroBlock (union discriminée par `variant`) → descripteurs partagés
(theme / responsive / accessibility) + champs propres à chaque variante.

Les clés sont en camelCase sur le fil (primaryButton, objectFit…) via
l'alias generator ; les champs inconnus sont refusés (extra="forbid") pour
garantir la conformité exacte au schéma de la variante.
"""
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VariantId(str, Enum):
    """Les dix variantes hero (énumération fermée)."""
    CENTERED     = "centered"
    SPLIT_SCREEN = "split-screen"
    VIDEO        = "video"
    MINIMAL      = "minimal"
    FEATURE      = "feature"
    TESTIMONIAL  = "testimonial"
    PRODUCT      = "product"
    SERVICE      = "service"
    CTA          = "cta"
    GALLERY      = "gallery"


class CamelModel(BaseModel):
    """Modèle sérialisé en camelCase, construit indifféremment en snake/camel."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeroRecord(CamelModel):
    """Enregistrement de contenu hero : clés camelCase uniquement, aucun champ hors schéma."""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)


class ValueRecord(HeroRecord):
    """Descripteur partagé entre variantes, immuable, copié par valeur."""
    model_config = ConfigDict(frozen=True)


# ── Texte / boutons / médias ─────────────────────────────────────────────────

TextTag = Literal["h1", "h2", "h3", "h4", "h5", "h6", "p", "span", "div"]


class TextBlock(HeroRecord):
    text: str
    tag: TextTag


class ButtonConfig(HeroRecord):
    text: str
    url: str
    style: Literal["primary", "secondary", "outline", "ghost", "link"]
    size: Literal["sm", "md", "lg", "xl"]
    icon: Optional[str] = None
    icon_position: Literal["left", "right"]
    target: Literal["_self", "_blank", "_parent", "_top"]
    rel: Optional[str] = None
    aria_label: Optional[str] = None


class MediaConfig(HeroRecord):
    id: str
    url: str
    type: Literal["image", "video"]
    alt: Optional[str] = None
    caption: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    aspect_ratio: Optional[str] = None
    object_fit: Literal["cover", "contain", "fill", "none", "scale-down"]
    loading: Literal["lazy", "eager"]


class VideoConfig(MediaConfig):
    autoplay: bool
    loop: bool
    muted: bool
    controls: bool
    poster: Optional[str] = None


# ── Fond ─────────────────────────────────────────────────────────────────────

class OverlayConfig(HeroRecord):
    enabled: bool
    color: str
    opacity: float = Field(ge=0, le=1)


class GradientStop(HeroRecord):
    color: str
    stop: float = Field(ge=0, le=100)


class GradientConfig(HeroRecord):
    type: Literal["linear", "radial"]
    direction: Optional[str] = None
    colors: List[GradientStop]


class BackgroundConfig(HeroRecord):
    """Fond : none | color (aplat) | gradient | image | video (+ overlay)."""
    type: Literal["none", "color", "gradient", "image", "video"]
    color: Optional[str] = None
    gradient: Optional[GradientConfig] = None
    image: Optional[MediaConfig] = None
    video: Optional[VideoConfig] = None
    overlay: Optional[OverlayConfig] = None


# ── Descripteurs partagés ────────────────────────────────────────────────────

class ThemeConfig(ValueRecord):
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str
    border_color: str
    font_family: Optional[str] = None
    border_radius: Optional[str] = None


class LayoutConfig(ValueRecord):
    direction: Literal["row", "column", "row-reverse", "column-reverse"]
    alignment: Literal["start", "center", "end", "stretch"]
    justification: Literal["start", "center", "end", "between", "around", "evenly"]
    gap: str
    padding: str
    margin: str


class TypographyConfig(ValueRecord):
    font_size: str
    line_height: str
    font_weight: str
    letter_spacing: Optional[str] = None
    text_align: Literal["left", "center", "right", "justify"]


class BoxSpacing(ValueRecord):
    top: str
    right: str
    bottom: str
    left: str


class SpacingConfig(ValueRecord):
    padding: BoxSpacing
    margin: BoxSpacing


class Breakpoint(ValueRecord):
    layout: LayoutConfig
    typography: TypographyConfig
    spacing: SpacingConfig


class ResponsiveConfig(ValueRecord):
    mobile: Breakpoint
    tablet: Breakpoint
    desktop: Breakpoint


class AnimationConfig(ValueRecord):
    enabled: bool
    type: Literal["fade", "slide", "scale", "bounce", "none"]
    duration: float
    delay: float
    easing: Literal["ease", "ease-in", "ease-out", "ease-in-out", "linear"]


class AccessibilityConfig(ValueRecord):
    aria_labels: Dict[str, str]
    alt_texts: Dict[str, str]
    keyboard_navigation: bool
    screen_reader_support: bool
    high_contrast: bool
    reduced_motion: bool


# ── Items de listes ──────────────────────────────────────────────────────────

class FeatureItem(HeroRecord):
    id: str
    icon: Optional[str] = None
    title: str
    description: str
    link: Optional[str] = None
    image: Optional[MediaConfig] = None


class TestimonialItem(HeroRecord):
    id: str
    quote: str
    author: str
    company: Optional[str] = None
    role: Optional[str] = None
    avatar: Optional[MediaConfig] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class ProductItem(HeroRecord):
    id: str
    name: str
    description: str
    price: Optional[str] = None
    original_price: Optional[str] = None
    currency: Optional[str] = None
    images: List[MediaConfig]
    features: Optional[List[str]] = None
    badge: Optional[str] = None
    link: Optional[str] = None


class ServiceItem(HeroRecord):
    id: str
    title: str
    description: str
    icon: Optional[str] = None
    image: Optional[MediaConfig] = None
    features: Optional[List[str]] = None
    link: Optional[str] = None


class GalleryItem(HeroRecord):
    id: str
    image: MediaConfig
    caption: Optional[str] = None
    link: Optional[str] = None


class TrustBadge(HeroRecord):
    id: str
    name: str
    image: MediaConfig
    link: Optional[str] = None


class SplitContent(HeroRecord):
    """Groupe de contenu imbriqué (content.title, content.buttons…)."""
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    description: Optional[TextBlock] = None
    buttons: List[ButtonConfig]


class VideoContent(SplitContent):
    position: Literal["center", "top-left", "top-right", "bottom-left", "bottom-right"]


# ── Variantes ────────────────────────────────────────────────────────────────

class BaseHero(HeroRecord):
    """Champs communs à toutes les variantes."""
    id: str
    variant: str
    theme: ThemeConfig
    responsive: ResponsiveConfig
    animation: Optional[AnimationConfig] = None
    accessibility: AccessibilityConfig


class HeroCentered(BaseHero):
    variant: Literal["centered"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    description: Optional[TextBlock] = None
    primary_button: Optional[ButtonConfig] = None
    secondary_button: Optional[ButtonConfig] = None
    background: BackgroundConfig
    text_align: Literal["left", "center", "right"]


class HeroSplitScreen(BaseHero):
    variant: Literal["split-screen"]
    content: SplitContent
    media: MediaConfig
    layout: Literal["left", "right"]
    content_alignment: Literal["start", "center", "end"]
    media_alignment: Literal["start", "center", "end"]
    background: BackgroundConfig


class HeroVideo(BaseHero):
    variant: Literal["video"]
    video: VideoConfig
    overlay: OverlayConfig
    content: VideoContent


class HeroMinimal(BaseHero):
    variant: Literal["minimal"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    button: Optional[ButtonConfig] = None
    background: BackgroundConfig
    spacing: Literal["compact", "normal", "spacious"]


class HeroFeature(BaseHero):
    variant: Literal["feature"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    description: Optional[TextBlock] = None
    features: List[FeatureItem]
    layout: Literal["grid", "list", "carousel"]
    columns: Literal[2, 3, 4]
    background: BackgroundConfig
    primary_button: Optional[ButtonConfig] = None


class HeroTestimonial(BaseHero):
    variant: Literal["testimonial"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    testimonials: List[TestimonialItem]
    layout: Literal["single", "carousel", "grid"]
    auto_rotate: bool
    rotation_interval: int = Field(ge=1000)
    show_ratings: bool
    background: BackgroundConfig
    primary_button: Optional[ButtonConfig] = None


class HeroProduct(BaseHero):
    variant: Literal["product"]
    product: ProductItem
    layout: Literal["left", "right", "center"]
    show_gallery: bool
    show_features: bool
    show_pricing: bool
    background: BackgroundConfig
    primary_button: Optional[ButtonConfig] = None
    secondary_button: Optional[ButtonConfig] = None


class HeroService(BaseHero):
    variant: Literal["service"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    description: Optional[TextBlock] = None
    services: List[ServiceItem]
    trust_badges: List[TrustBadge]
    layout: Literal["grid", "list"]
    show_trust_badges: bool
    background: BackgroundConfig
    primary_button: Optional[ButtonConfig] = None
    contact_button: Optional[ButtonConfig] = None


class HeroCTA(BaseHero):
    variant: Literal["cta"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    description: Optional[TextBlock] = None
    primary_button: ButtonConfig
    secondary_button: Optional[ButtonConfig] = None
    urgency_text: Optional[TextBlock] = None
    benefits: Optional[List[str]] = None
    background: BackgroundConfig
    layout: Literal["center", "split"]
    show_benefits: bool


class HeroGallery(BaseHero):
    variant: Literal["gallery"]
    title: TextBlock
    subtitle: Optional[TextBlock] = None
    gallery: List[GalleryItem]
    layout: Literal["grid", "masonry", "carousel"]
    columns: Literal[2, 3, 4, 5]
    show_captions: bool
    lightbox: bool
    autoplay: bool
    autoplay_interval: int = Field(ge=1000)
    background: BackgroundConfig
    primary_button: Optional[ButtonConfig] = None


# Union discriminée par variant, validation d'un bloc quelconque
HeroBlock = Annotated[
    Union[
        HeroCentered,
        HeroSplitScreen,
        HeroVideo,
        HeroMinimal,
        HeroFeature,
        HeroTestimonial,
        HeroProduct,
        HeroService,
        HeroCTA,
        HeroGallery,
    ],
    Field(discriminator="variant"),
]

VARIANT_MODELS: Dict[VariantId, Type[BaseHero]] = {
    VariantId.CENTERED:     HeroCentered,
    VariantId.SPLIT_SCREEN: HeroSplitScreen,
    VariantId.VIDEO:        HeroVideo,
    VariantId.MINIMAL:      HeroMinimal,
    VariantId.FEATURE:      HeroFeature,
    VariantId.TESTIMONIAL:  HeroTestimonial,
    VariantId.PRODUCT:      HeroProduct,
    VariantId.SERVICE:      HeroService,
    VariantId.CTA:          HeroCTA,
    VariantId.GALLERY:      HeroGallery,
}


def coerce_variant(value) -> Optional[VariantId]:
    """VariantId ou "split-screen" → VariantId ; None si inconnu."""
    if isinstance(value, VariantId):
        return value
    try:
        return VariantId(value)
    except (ValueError, TypeError):
        return None
