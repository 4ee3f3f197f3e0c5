"""Tests migration: conformité, idempotence, boutons, stratégies, rapport."""
import copy
import itertools

import pytest

from hero_variants import (
    VariantId, batch_migrate, default_instance, get_schema, migrate,
    preview_migration, validate_instance,
)
from hero_variants.paths import has_path

ALL = [v.value for v in VariantId]
STRATEGIES = ["conservative", "balanced", "flexible"]
SHARED = ["theme", "responsive", "accessibility"]


# ── Scénarios de référence ───────────────────────────────────────────────────

def test_centered_to_split_balanced(centered):
    result = migrate(centered, "split-screen", "balanced")
    props = result.migrated_props
    assert result.success
    assert props["content"]["title"]["text"] == "Welcome"
    assert [b["text"] for b in props["content"]["buttons"]] == ["Get Started", "Learn More"]
    assert "textAlign" in result.dropped_properties
    assert "title" in result.migrated_properties
    assert "background" in result.migrated_properties
    assert "primaryButton" in result.transformed_properties


def test_centered_to_minimal_conservative(centered):
    result = migrate(centered, "minimal", "conservative")
    props = result.migrated_props
    assert props["title"]["text"] == "Welcome"
    assert props["button"]["text"] == "Get Started"
    assert "description" not in props
    assert "secondaryButton" in result.dropped_properties
    assert any("Learn More" in w for w in result.warnings)
    assert "primaryButton" in result.migrated_properties


# ── Propriétés générales ─────────────────────────────────────────────────────

@pytest.mark.parametrize("source, target, strategy", list(itertools.product(ALL, ALL, STRATEGIES)))
def test_output_conforms_to_target_schema(source, target, strategy):
    block = default_instance(source, block_id="hero-src")
    result = migrate(block, target, strategy)
    assert result.success
    assert result.errors == []
    assert result.migrated_props["variant"] == target
    assert result.migrated_props["id"] == "hero-src"
    assert validate_instance(result.migrated_props) == []


@pytest.mark.parametrize("source, target, strategy", list(itertools.product(ALL, ALL, STRATEGIES)))
def test_report_covers_every_source_field(source, target, strategy):
    block = default_instance(source)
    result = migrate(block, target, strategy)
    reported = set(result.migrated_properties) | set(result.transformed_properties) | set(result.dropped_properties)
    present = [f.path for f in get_schema(source).mapping_fields() if has_path(block, f.path)]
    for path in present + SHARED:
        assert path in reported, f"{path} absent du rapport {source} → {target}"


@pytest.mark.parametrize("variant, strategy", list(itertools.product(ALL, STRATEGIES)))
def test_same_variant_is_identity(variant, strategy):
    block = default_instance(variant)
    result = migrate(block, variant, strategy)
    assert result.migrated_props == block
    assert result.dropped_properties == []
    assert result.added_defaults == []
    assert result.warnings == []


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_same_variant_keeps_explicit_none(centered, strategy):
    centered["subtitle"] = None
    centered["animation"] = None
    result = migrate(centered, "centered", strategy)
    assert result.migrated_props == centered
    assert "subtitle" in result.migrated_properties
    assert result.dropped_properties == []


def test_unknown_source_key_reported(centered):
    """Une clé snake_case hors schéma n'est jamais perdue en silence."""
    centered["primary_button"] = {"text": "Acheter", "url": "/buy"}
    for target in ("centered", "split-screen"):
        result = migrate(centered, target, "balanced")
        assert "primary_button" in result.dropped_properties
        assert any("primary_button" in w for w in result.warnings)
        assert "primary_button" not in result.migrated_props
        assert validate_instance(result.migrated_props) == []


def test_registry_defaults_survive_caller_mutation(centered):
    get_schema("split-screen").field("content.buttons").default[0]["text"] = "Piraté"
    result = migrate(centered, "split-screen", "conservative")
    assert result.migrated_props["content"]["buttons"][0]["text"] == "Start Free Trial"


def test_migration_does_not_mutate_input(centered):
    before = copy.deepcopy(centered)
    result = migrate(centered, "video", "flexible")
    assert centered == before
    result.migrated_props["theme"]["primaryColor"] = "#000000"
    assert centered["theme"]["primaryColor"] == before["theme"]["primaryColor"]


def test_shared_descriptors_carried(centered):
    centered["theme"]["primaryColor"] = "#ff0000"
    centered["animation"] = {"enabled": True, "type": "fade", "duration": 0.5, "delay": 0, "easing": "ease"}
    props = migrate(centered, "gallery", "balanced").migrated_props
    assert props["theme"]["primaryColor"] == "#ff0000"
    assert props["animation"]["type"] == "fade"


def test_missing_shared_descriptor_filled(centered):
    del centered["theme"]
    result = migrate(centered, "minimal")
    assert "theme" in result.added_defaults
    assert result.migrated_props["theme"]["primaryColor"] == "#3b82f6"


# ── Échecs ───────────────────────────────────────────────────────────────────

class TestFailures:
    def test_unknown_target(self, centered):
        result = migrate(centered, "hero-xl", "balanced")
        assert result.success is False
        assert result.migrated_props is None
        assert result.errors
        assert "hero-xl" in result.errors[0]

    def test_unknown_source(self):
        result = migrate({"id": "x", "variant": "banner"}, "centered")
        assert result.success is False
        assert result.errors

    def test_unknown_strategy(self, centered):
        result = migrate(centered, "minimal", "aggressive")
        assert result.success is False
        assert "aggressive" in result.errors[0]


# ── Boutons ──────────────────────────────────────────────────────────────────

class TestButtons:
    def test_surplus_buttons_dropped_with_warning(self, split_three_buttons):
        result = migrate(split_three_buttons, "minimal", "balanced")
        assert result.migrated_props["button"]["text"] == "Essai gratuit"
        assert "content.buttons" in result.transformed_properties
        assert "content.buttons[1]" in result.dropped_properties
        assert "content.buttons[2]" in result.dropped_properties
        assert any("Démo" in w for w in result.warnings)
        assert any("Tarifs" in w for w in result.warnings)

    def test_list_fills_single_slots_in_order(self, split_three_buttons):
        props = migrate(split_three_buttons, "centered", "balanced").migrated_props
        assert props["primaryButton"]["text"] == "Essai gratuit"
        assert props["secondaryButton"]["text"] == "Démo"

    def test_first_non_empty_button_wins(self, centered):
        centered["primaryButton"]["text"] = "   "
        result = migrate(centered, "minimal", "conservative")
        assert result.migrated_props["button"]["text"] == "Learn More"
        assert "primaryButton" in result.dropped_properties
        assert not any("primaryButton" in w for w in result.warnings)

    def test_conservative_refuses_structural(self, centered):
        result = migrate(centered, "split-screen", "conservative")
        assert "primaryButton" in result.dropped_properties
        assert "content.buttons" in result.added_defaults
        assert any("balanced" in w for w in result.warnings)

    def test_list_to_list_is_direct(self, split_three_buttons):
        result = migrate(split_three_buttons, "video", "conservative")
        assert len(result.migrated_props["content"]["buttons"]) == 3
        assert "content.buttons" in result.migrated_properties


# ── Stratégies ───────────────────────────────────────────────────────────────

class TestStrategies:
    def test_title_to_product_name_needs_flexible(self, centered):
        balanced = migrate(centered, "product", "balanced")
        assert balanced.migrated_props["product"]["name"] == "Amazing Product"
        assert "title" in balanced.dropped_properties
        assert "product.name" in balanced.added_defaults

        flexible = migrate(centered, "product", "flexible")
        assert flexible.migrated_props["product"]["name"] == "Welcome"
        assert "title" in flexible.transformed_properties

    def test_product_name_to_text_block(self):
        props = migrate(default_instance("product"), "centered", "flexible").migrated_props
        assert props["title"] == {"text": "Amazing Product", "tag": "h1"}

    def test_features_to_services(self):
        feature = default_instance("feature")
        props = migrate(feature, "service", "flexible").migrated_props
        assert [s["title"] for s in props["services"]] == ["Lightning Fast", "Secure", "Responsive"]
        assert migrate(feature, "service", "balanced").migrated_props["services"][0]["title"] == "Consulting"

    def test_services_to_features_drop_sub_features(self):
        result = migrate(default_instance("service"), "feature", "flexible")
        props = result.migrated_props
        assert props["features"][0]["title"] == "Consulting"
        assert "features" not in props["features"][0]
        assert "services" in result.transformed_properties
        assert "services[0].features" in result.dropped_properties
        assert any("services[0].features" in w for w in result.warnings)

    def test_product_images_to_gallery_is_structural(self):
        product = default_instance("product")
        result = migrate(product, "gallery", "balanced")
        urls = [item["image"]["url"] for item in result.migrated_props["gallery"]]
        assert urls == [img["url"] for img in product["product"]["images"]]
        assert "product.images" in result.transformed_properties

    def test_video_to_split_media(self):
        result = migrate(default_instance("video"), "split-screen", "flexible")
        media = result.migrated_props["media"]
        assert media["url"] == "/assets/hero/hero-video.mp4"
        assert "autoplay" not in media
        assert "video" in result.transformed_properties
        assert "video.poster" in result.dropped_properties

    def test_image_cannot_become_video(self):
        result = migrate(default_instance("split-screen"), "video", "flexible")
        assert "media" in result.dropped_properties
        assert "video" in result.added_defaults

    def test_conservative_fills_optional_defaults(self, centered):
        conservative = migrate(centered, "cta", "conservative")
        assert "urgencyText" in conservative.added_defaults
        balanced = migrate(centered, "cta", "balanced")
        assert "urgencyText" not in balanced.migrated_props
        assert balanced.migrated_props["primaryButton"]["text"] == "Get Started"


# ── Réparation ───────────────────────────────────────────────────────────────

class TestRepair:
    def test_invalid_value_reset_to_default(self, centered):
        centered["textAlign"] = "justify"
        result = migrate(centered, "centered")
        assert result.migrated_props["textAlign"] == "center"
        assert "textAlign" in result.dropped_properties
        assert validate_instance(result.migrated_props) == []

    def test_unknown_nested_key_removed(self, centered):
        centered["primaryButton"]["tracking"] = "utm"
        result = migrate(centered, "minimal", "balanced")
        assert "tracking" not in result.migrated_props["button"]
        assert any("button.tracking" in w for w in result.warnings)
        assert validate_instance(result.migrated_props) == []

    def test_optional_invalid_field_removed(self, centered):
        centered["subtitle"] = {"text": "Hello", "tag": "blink"}
        result = migrate(centered, "minimal", "balanced")
        assert "subtitle" not in result.migrated_props
        assert "subtitle" in result.dropped_properties


# ── Rapport / API ────────────────────────────────────────────────────────────

def test_report_and_camel_case_dump(centered):
    result = migrate(centered, "split-screen", "balanced")
    report = result.report()
    assert report.source_variant == "centered"
    assert report.target_variant == "split-screen"
    assert report.dropped_properties == result.dropped_properties
    dumped = result.model_dump(by_alias=True)
    assert "migratedProps" in dumped
    assert "droppedProperties" in dumped
    assert '"migratedProps"' in result.model_dump_json(by_alias=True)


def test_recommendations_from_verdict(centered):
    result = migrate(centered, "product", "balanced")
    assert any("flexible" in r for r in result.recommendations)


def test_preview_migration(centered):
    verdict, result = preview_migration(centered, "minimal", "conservative")
    assert verdict.compatibility == "medium"
    assert result.migrated_props["button"]["text"] == "Get Started"


def test_preview_migration_failure(centered):
    verdict, result = preview_migration(centered, "nope")
    assert verdict is None
    assert not result.success


def test_batch_migrate(centered):
    results = batch_migrate([centered, default_instance("cta")], "minimal", "balanced")
    assert [r.target_variant for r in results] == ["minimal", "minimal"]
    assert all(r.success for r in results)
