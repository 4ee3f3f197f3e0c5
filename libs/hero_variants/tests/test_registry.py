"""Tests registry: schémas, instances par défaut, validation, visibilité."""
import pytest

from hero_variants import (
    REGISTRY, UnknownVariantError, VariantId,
    all_variants, default_instance, get_schema, validate_instance, validate_schema,
)
from hero_variants.registry import FieldDependency

ALL = [v.value for v in VariantId]


# ── Catalogue ────────────────────────────────────────────────────────────────

def test_all_variants_in_declaration_order():
    assert [v.value for v in all_variants()] == [
        "centered", "split-screen", "video", "minimal", "feature",
        "testimonial", "product", "service", "cta", "gallery",
    ]


def test_get_accepts_enum_and_string():
    assert get_schema(VariantId.SPLIT_SCREEN) is get_schema("split-screen")
    assert get_schema("cta").name == "Hero CTA"


def test_get_unknown_variant_raises():
    with pytest.raises(UnknownVariantError) as exc:
        get_schema("carousel")
    assert exc.value.variant == "carousel"
    assert isinstance(exc.value, KeyError)


def test_field_defaults_come_from_default_instance():
    schema = get_schema("centered")
    assert schema.field("textAlign").default == "center"
    assert schema.field("title").default == {"text": "Welcome to Your Website", "tag": "h1"}


def test_mapping_fields_exclude_editor_sub_fields():
    paths = [f.path for f in get_schema("centered").mapping_fields()]
    assert "background" in paths
    assert "background.type" not in paths
    assert "primaryButton.url" not in paths


def test_required_paths_match_model():
    assert get_schema("minimal").required_paths() == ["title", "background", "spacing"]
    assert "product.images" in get_schema("product").required_paths()


# ── Instances par défaut ─────────────────────────────────────────────────────

@pytest.mark.parametrize("variant", ALL)
def test_default_instance_validates(variant):
    block = default_instance(variant)
    assert block["variant"] == variant
    assert validate_instance(block) == []


@pytest.mark.parametrize("variant", ALL)
def test_schema_self_check(variant):
    assert validate_schema(get_schema(variant)) == []


def test_default_instances_never_share_nested_objects():
    a = default_instance("centered")
    b = default_instance("centered")
    assert a["id"] != b["id"]
    a["background"]["overlay"]["opacity"] = 0.9
    a["theme"]["primaryColor"] = "#000000"
    assert b["background"]["overlay"]["opacity"] == 0.4
    assert b["theme"]["primaryColor"] == "#3b82f6"


def test_default_instance_explicit_id():
    assert default_instance("video", block_id="hero-42")["id"] == "hero-42"



def test_field_default_is_a_fresh_copy():
    """Modifier un défaut lu ne touche ni le registry ni les migrations suivantes."""
    buttons = get_schema("split-screen").field("content.buttons").default
    buttons[0]["text"] = "Piraté"
    assert get_schema("split-screen").field("content.buttons").default[0]["text"] == "Start Free Trial"


# ── Validation ───────────────────────────────────────────────────────────────

def test_validate_schema_reports_missing_fields_and_bad_rules():
    broken = get_schema("minimal").model_copy(update={
        "fields": (),
        "dependencies": (FieldDependency(field="ghost", depends_on="title"),),
    })
    errors = validate_schema(broken)
    assert any("champs est requise" in e for e in errors)
    assert any("ghost" in e for e in errors)


def test_validate_instance_rejects_unknown_key():
    block = default_instance("minimal")
    block["textAlign"] = "center"
    errors = validate_instance(block)
    assert errors
    assert errors[0].startswith("textAlign")


def test_validate_instance_rejects_snake_case_keys():
    block = default_instance("centered")
    block["primary_button"] = block.pop("primaryButton")
    errors = validate_instance(block)
    assert any(e.startswith("primary_button") for e in errors)


def test_validate_instance_rejects_missing_required():
    block = default_instance("centered")
    del block["title"]
    assert any(e.startswith("title") for e in validate_instance(block))


def test_validate_instance_rejects_non_dict():
    assert validate_instance(["centered"]) != []


def test_parse_returns_variant_model():
    model = REGISTRY.parse(default_instance("gallery"))
    assert type(model).__name__ == "HeroGallery"
    assert model.autoplay_interval == 5000


# ── Visibilité des champs ────────────────────────────────────────────────────

def test_visible_fields_follow_overlay_toggle():
    block = default_instance("video")
    assert "overlay.color" in REGISTRY.visible_fields(block)
    block["overlay"]["enabled"] = False
    visible = REGISTRY.visible_fields(block)
    assert "overlay.color" not in visible
    assert "overlay.enabled" in visible


def test_visible_fields_background_payload():
    block = default_instance("split-screen")
    visible = REGISTRY.visible_fields(block)
    assert "background.color" in visible
    assert "background.image" not in visible


def test_visible_fields_not_equals_rule():
    block = default_instance("gallery")
    assert "columns" in REGISTRY.visible_fields(block)
    block["layout"] = "carousel"
    assert "columns" not in REGISTRY.visible_fields(block)
