"""
Instances par défaut des dix variantes hero.

Chaque fabrique est une fonction pure qui reconstruit un graphe neuf à chaque
appel : deux instances ne partagent jamais un overlay, un thème ou un bouton.
"""
import uuid
from typing import Callable, Dict, Optional

from .models import VariantId


def new_block_id(variant: str) -> str:
    return f"hero-{variant}-{uuid.uuid4().hex[:8]}"


# ── Descripteurs partagés ────────────────────────────────────────────────────

def default_theme() -> dict:
    return {
        "primaryColor":    "#3b82f6",
        "secondaryColor":  "#64748b",
        "accentColor":     "#f59e0b",
        "backgroundColor": "#ffffff",
        "textColor":       "#1f2937",
        "borderColor":     "#e5e7eb",
        "fontFamily":      "system-ui, -apple-system, sans-serif",
        "borderRadius":    "0.5rem",
    }


def _breakpoint(direction: str, gap: str, font_size: str, line_height: str,
                pad_y: str, pad_x: str) -> dict:
    zero = {"top": "0", "right": "0", "bottom": "0", "left": "0"}
    return {
        "layout": {
            "direction": direction,
            "alignment": "center",
            "justification": "center",
            "gap": gap,
            "padding": gap,
            "margin": "0",
        },
        "typography": {
            "fontSize": font_size,
            "lineHeight": line_height,
            "fontWeight": "normal",
            "textAlign": "center",
        },
        "spacing": {
            "padding": {"top": pad_y, "right": pad_x, "bottom": pad_y, "left": pad_x},
            "margin": dict(zero),
        },
    }


def default_responsive() -> dict:
    return {
        "mobile":  _breakpoint("column", "1rem", "base", "1.5", "2rem", "1rem"),
        "tablet":  _breakpoint("row",    "2rem", "lg",   "1.6", "3rem", "2rem"),
        "desktop": _breakpoint("row",    "3rem", "xl",   "1.7", "4rem", "3rem"),
    }


def default_accessibility() -> dict:
    return {
        "ariaLabels": {},
        "altTexts": {},
        "keyboardNavigation": True,
        "screenReaderSupport": True,
        "highContrast": False,
        "reducedMotion": False,
    }


# ── Briques de contenu ───────────────────────────────────────────────────────

def text(value: str, tag: str = "p") -> dict:
    return {"text": value, "tag": tag}


def button(label: str, url: str = "#", style: str = "primary", size: str = "lg",
           icon_position: str = "right", **extra) -> dict:
    data = {
        "text": label,
        "url": url,
        "style": style,
        "size": size,
        "iconPosition": icon_position,
        "target": "_self",
    }
    data.update(extra)
    return data


def image(media_id: str, url: str, alt: str, object_fit: str = "cover",
          loading: str = "lazy") -> dict:
    return {
        "id": media_id,
        "url": url,
        "type": "image",
        "alt": alt,
        "objectFit": object_fit,
        "loading": loading,
    }


def overlay(enabled: bool = False, opacity: float = 0.4) -> dict:
    return {"enabled": enabled, "color": "#000000", "opacity": opacity}


def gradient_background(start: str, end: str, direction: str = "135deg",
                        with_overlay: Optional[dict] = None) -> dict:
    background = {
        "type": "gradient",
        "gradient": {
            "type": "linear",
            "direction": direction,
            "colors": [{"color": start, "stop": 0}, {"color": end, "stop": 100}],
        },
    }
    if with_overlay is not None:
        background["overlay"] = with_overlay
    return background


def color_background(color: str = "#ffffff") -> dict:
    return {"type": "color", "color": color}


# ── Contenus par variante ────────────────────────────────────────────────────

def _centered() -> dict:
    return {
        "title": text("Welcome to Your Website", "h1"),
        "subtitle": text("Build amazing experiences with our platform"),
        "description": text("Discover the power of our innovative solutions designed to help you succeed."),
        "primaryButton": button("Get Started"),
        "secondaryButton": button("Learn More", style="outline", icon_position="left"),
        "background": gradient_background("#3b82f6", "#8b5cf6", "45deg", overlay()),
        "textAlign": "center",
    }


def _split_screen() -> dict:
    return {
        "content": {
            "title": text("Innovative Solutions", "h1"),
            "subtitle": text("Transform Your Business", "h2"),
            "description": text(
                "Discover how our cutting-edge technology can revolutionize "
                "your workflow and drive unprecedented growth."
            ),
            "buttons": [button("Start Free Trial")],
        },
        "media": image("hero-media", "/assets/hero/hero-image.jpg", "Hero image", loading="eager"),
        "layout": "left",
        "contentAlignment": "center",
        "mediaAlignment": "center",
        "background": color_background(),
    }


def _video() -> dict:
    return {
        "video": {
            "id": "hero-video",
            "url": "/assets/hero/hero-video.mp4",
            "type": "video",
            "autoplay": True,
            "loop": True,
            "muted": True,
            "controls": False,
            "poster": "/assets/hero/video-poster.jpg",
            "objectFit": "cover",
            "loading": "eager",
        },
        "overlay": overlay(enabled=True),
        "content": {
            "title": text("Experience Innovation", "h1"),
            "subtitle": text("See Our Product in Action", "h2"),
            "description": text("Watch how our solution transforms businesses worldwide."),
            "buttons": [button("Watch Demo", icon="▶️", icon_position="left")],
            "position": "center",
        },
    }


def _minimal() -> dict:
    return {
        "title": text("Simple. Elegant. Effective.", "h1"),
        "subtitle": text("Less is more", "h2"),
        "button": button("Explore", style="link"),
        "background": color_background(),
        "spacing": "normal",
    }


def _feature() -> dict:
    return {
        "title": text("Powerful Features", "h1"),
        "subtitle": text("Everything you need to succeed", "h2"),
        "description": text("Discover the comprehensive set of tools designed to accelerate your growth."),
        "features": [
            {"id": "1", "icon": "🚀", "title": "Lightning Fast", "description": "Optimized for speed and performance"},
            {"id": "2", "icon": "🔒", "title": "Secure", "description": "Enterprise-grade security built-in"},
            {"id": "3", "icon": "📱", "title": "Responsive", "description": "Works perfectly on all devices"},
        ],
        "layout": "grid",
        "columns": 3,
        "background": gradient_background("#667eea", "#764ba2"),
        "primaryButton": button("Get Started"),
    }


def _testimonial() -> dict:
    return {
        "title": text("What Our Customers Say", "h1"),
        "subtitle": text("Trusted by thousands of businesses worldwide", "h2"),
        "testimonials": [
            {
                "id": "testimonial-1",
                "quote": "This product has completely transformed our business operations. "
                         "The results exceeded our expectations.",
                "author": "Sarah Johnson",
                "company": "TechCorp Inc.",
                "role": "CEO",
                "rating": 5,
                "avatar": image("avatar-1", "/assets/testimonials/sarah-johnson.jpg", "Sarah Johnson avatar"),
            },
            {
                "id": "testimonial-2",
                "quote": "Outstanding service and incredible results. I would highly recommend this to anyone.",
                "author": "Michael Chen",
                "company": "Design Studio",
                "role": "Creative Director",
                "rating": 5,
            },
            {
                "id": "testimonial-3",
                "quote": "The best investment we have made for our company this year. Fantastic support team.",
                "author": "Emily Rodriguez",
                "company": "StartupXYZ",
                "role": "Founder",
                "rating": 4,
            },
        ],
        "layout": "single",
        "autoRotate": False,
        "rotationInterval": 5000,
        "showRatings": True,
        "background": gradient_background("#667eea", "#764ba2", with_overlay=overlay()),
        "primaryButton": button("Get Started"),
    }


def _product() -> dict:
    return {
        "product": {
            "id": "product-1",
            "name": "Amazing Product",
            "description": "Discover our flagship product that will transform your experience "
                           "with innovative features and exceptional quality.",
            "price": "99.99",
            "originalPrice": "149.99",
            "currency": "$",
            "badge": "Best Seller",
            "images": [
                image("product-image-1", "/assets/hero/product-main.jpg", "Amazing Product - Main View", loading="eager"),
                image("product-image-2", "/assets/hero/product-side.jpg", "Amazing Product - Side View"),
                image("product-image-3", "/assets/hero/product-detail.jpg", "Amazing Product - Detail View"),
            ],
            "features": [
                "Premium quality materials",
                "Advanced technology integration",
                "Eco-friendly design",
                "2-year warranty included",
                "Free shipping worldwide",
            ],
            "link": "/products/amazing-product",
        },
        "layout": "left",
        "showGallery": True,
        "showFeatures": True,
        "showPricing": True,
        "background": {**color_background(), "overlay": overlay()},
        "primaryButton": button("Buy Now", "/checkout"),
        "secondaryButton": button("Learn More", "/products/amazing-product", style="outline", icon_position="left"),
    }


def _service() -> dict:
    return {
        "title": text("Professional Services", "h1"),
        "subtitle": text("Expert solutions tailored to your business needs", "h2"),
        "description": text(
            "We provide comprehensive services designed to help your business "
            "grow and succeed in today's competitive market."
        ),
        "services": [
            {"id": "service-1", "title": "Consulting", "description": "Strategic business consulting to drive growth",
             "icon": "💼", "features": ["Expert analysis", "Custom strategies", "Implementation support"]},
            {"id": "service-2", "title": "Development", "description": "Custom software development solutions",
             "icon": "💻", "features": ["Web applications", "Mobile apps", "API integration"]},
            {"id": "service-3", "title": "Support", "description": "24/7 technical support and maintenance",
             "icon": "🛠️", "features": ["Round-the-clock support", "Proactive monitoring", "Quick resolution"]},
        ],
        "trustBadges": [
            {"id": "badge-1", "name": "ISO Certified",
             "image": image("iso-badge", "/assets/badges/iso-certified.png", "ISO Certified badge", "contain")},
            {"id": "badge-2", "name": "Industry Leader",
             "image": image("leader-badge", "/assets/badges/industry-leader.png", "Industry Leader badge", "contain")},
        ],
        "layout": "grid",
        "showTrustBadges": True,
        "background": color_background(),
        "primaryButton": button("Get Started"),
        "contactButton": button("Contact Us", "#contact", style="outline", icon_position="left"),
    }


def _cta() -> dict:
    return {
        "title": text("Transform Your Business Today", "h1"),
        "subtitle": text("Join thousands of successful companies", "h2"),
        "description": text("Get the tools and insights you need to grow your business faster than ever before."),
        "primaryButton": button("Start Free Trial", "#signup", size="xl", ariaLabel="Start your free trial now"),
        "secondaryButton": button("Watch Demo", "#demo", style="outline", icon_position="left",
                                  ariaLabel="Watch product demo"),
        "urgencyText": text("Limited Time: 50% Off First Month!", "span"),
        "benefits": [
            "No setup fees or hidden costs",
            "24/7 customer support included",
            "Cancel anytime, no questions asked",
            "Results guaranteed in 30 days",
        ],
        "background": gradient_background("#667eea", "#764ba2", with_overlay=overlay(True, 0.3)),
        "layout": "center",
        "showBenefits": True,
    }


def _gallery() -> dict:
    def item(n: int, alt: str, caption: str) -> dict:
        return {
            "id": f"sample-{n}",
            "image": image(f"sample-image-{n}", f"/assets/hero/gallery-{n}.jpg", alt),
            "caption": caption,
        }

    return {
        "title": text("Our Photo Gallery", "h1"),
        "subtitle": text(
            "Explore our collection of stunning images showcasing the beauty "
            "of nature and urban landscapes."
        ),
        "gallery": [
            item(1, "Beautiful mountain landscape", "Stunning mountain vista at sunrise"),
            item(2, "Forest path through tall trees", "Peaceful forest trail"),
            item(3, "Ocean waves on sandy beach", "Serene ocean coastline"),
        ],
        "layout": "grid",
        "columns": 3,
        "showCaptions": True,
        "lightbox": True,
        "autoplay": False,
        "autoplayInterval": 5000,
        "background": {"type": "none"},
        "primaryButton": button("View All Photos", "#gallery"),
    }


_CONTENT_FACTORIES: Dict[VariantId, Callable[[], dict]] = {
    VariantId.CENTERED:     _centered,
    VariantId.SPLIT_SCREEN: _split_screen,
    VariantId.VIDEO:        _video,
    VariantId.MINIMAL:      _minimal,
    VariantId.FEATURE:      _feature,
    VariantId.TESTIMONIAL:  _testimonial,
    VariantId.PRODUCT:      _product,
    VariantId.SERVICE:      _service,
    VariantId.CTA:          _cta,
    VariantId.GALLERY:      _gallery,
}


def content_factory(variant: VariantId) -> Optional[Callable[[], dict]]:
    return _CONTENT_FACTORIES.get(variant)


def build_default_instance(variant: VariantId, block_id: Optional[str] = None) -> dict:
    """Bloc complet (identité + descripteurs partagés + contenu de la variante)."""
    factory = _CONTENT_FACTORIES[variant]
    return {
        "id": block_id or new_block_id(variant.value),
        "variant": variant.value,
        "theme": default_theme(),
        "responsive": default_responsive(),
        "accessibility": default_accessibility(),
        **factory(),
    }
