"""Tests compatibility: verdicts des 100 paires ordonnées."""
import itertools

import pytest
from pydantic import ValidationError

from hero_variants import UnknownVariantError, VariantId, classify, rank_targets

ALL = [v.value for v in VariantId]
PAIRS = list(itertools.product(ALL, ALL))


@pytest.mark.parametrize("source, target", PAIRS)
def test_classify_defined_for_every_pair(source, target):
    verdict = classify(source, target)
    assert verdict.source.value == source
    assert verdict.target.value == target
    assert verdict.is_supported
    assert verdict.compatibility in ("high", "medium", "low")
    expected_risk = {"high": "low", "medium": "medium", "low": "high"}[verdict.compatibility]
    assert verdict.data_loss_risk == expected_risk
    if verdict.compatibility == "low":
        assert verdict.warnings
        assert verdict.recommendations


@pytest.mark.parametrize("variant", ALL)
def test_self_pair_is_lossless(variant):
    verdict = classify(variant, variant)
    assert (verdict.compatibility, verdict.data_loss_risk) == ("high", "low")
    assert verdict.warnings == ()
    assert verdict.recommendations == ()


@pytest.mark.parametrize("source, target, level", [
    ("centered", "split-screen", "high"),
    ("centered", "cta", "high"),
    ("video", "centered", "medium"),
    ("feature", "service", "high"),
    ("gallery", "minimal", "low"),
    ("centered", "product", "low"),
])
def test_known_levels(source, target, level):
    assert classify(source, target).compatibility == level


def test_warnings_list_fields_without_counterpart():
    verdict = classify("centered", "minimal")
    text = " ".join(verdict.warnings)
    assert "description" in text
    assert "textAlign" in text
    assert "secondaryButton" in text


def test_medium_pair_recommends_balanced():
    verdict = classify("video", "centered")
    assert any("balanced" in r for r in verdict.recommendations)


def test_classify_unknown_variant():
    with pytest.raises(UnknownVariantError):
        classify("centered", "hero-xl")


def test_verdict_is_frozen():
    with pytest.raises(ValidationError):
        classify("centered", "video").compatibility = "high"


def test_rank_targets():
    ranked = rank_targets("centered")
    assert len(ranked) == 9
    assert "centered" not in [v.target.value for v in ranked]
    levels = [v.compatibility for v in ranked]
    assert levels == sorted(levels, key=["high", "medium", "low"].index)
    assert ranked[0].compatibility == "high"
