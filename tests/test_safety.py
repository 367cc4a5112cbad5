"""
Safety classifier tests — allergy escalation over the intrinsic catalog tier.

Tests cover:
  Direct allergy on the ingredient name
  Allergen-tag overlap in either direction
  Intrinsic tier as the floor, never lowered by allergies
  Heuristic tier for names missing from the catalog
"""

import pytest

from skinroutine.schemas import Ingredient, SafetyLevel
from skinroutine.seed import seed_catalog
from skinroutine.services.safety import (
    SafetyClassifier,
    annotate_ingredient,
    classify_ingredient,
    match_allergies,
)

_SEVERITY = {SafetyLevel.SAFE: 0, SafetyLevel.CAUTION: 1, SafetyLevel.WARNING: 2}


def _ingredient(**overrides) -> Ingredient:
    defaults = dict(
        id="ing-1",
        name="Raw Honey",
        safety_level="safe",
        common_allergens=["honey", "bee products", "pollen"],
    )
    defaults.update(overrides)
    return Ingredient(**defaults)


# ── Pure rules ──────────────────────────────────────────────────────────────


class TestMatchAllergies:
    def test_direct_match_is_case_insensitive(self):
        rule, matched = match_allergies("Raw Honey", _ingredient(), ["RAW HONEY "])
        assert rule == "direct"
        assert matched == ["raw honey"]

    def test_allergy_inside_tag(self):
        rule, matched = match_allergies("Raw Honey", _ingredient(), ["bee"])
        assert rule == "allergen"
        assert matched == ["bee"]

    def test_tag_inside_allergy(self):
        rule, _ = match_allergies("Raw Honey", _ingredient(), ["manuka honey"])
        assert rule == "allergen"

    def test_no_overlap(self):
        assert match_allergies("Raw Honey", _ingredient(), ["latex"]) == (None, [])

    def test_blank_allergies_ignored(self):
        assert match_allergies("Raw Honey", _ingredient(), ["", "  "]) == (None, [])

    def test_unknown_ingredient_only_matches_directly(self):
        assert match_allergies("Mango Butter", None, ["mango butter"])[0] == "direct"
        assert match_allergies("Mango Butter", None, ["mango"]) == (None, [])


class TestClassifyIngredient:
    def test_intrinsic_tier_without_allergies(self):
        assert classify_ingredient("Raw Honey", _ingredient(), []) == SafetyLevel.SAFE
        retinol = _ingredient(name="Retinol", safety_level="caution", common_allergens=[])
        assert classify_ingredient("Retinol", retinol, []) == SafetyLevel.CAUTION

    def test_direct_allergy_escalates_to_warning(self):
        assert classify_ingredient("Raw Honey", _ingredient(), ["raw honey"]) == SafetyLevel.WARNING

    def test_allergen_overlap_escalates_to_warning(self):
        assert classify_ingredient("Raw Honey", _ingredient(), ["pollen"]) == SafetyLevel.WARNING

    def test_warning_tier_stays_warning(self):
        fragrance = _ingredient(name="Fragrance", safety_level="warning", common_allergens=[])
        assert classify_ingredient("Fragrance", fragrance, []) == SafetyLevel.WARNING

    @pytest.mark.parametrize("allergies", [[], ["honey"], ["latex"], ["raw honey", "pollen"]])
    @pytest.mark.parametrize("tier", ["safe", "caution", "warning"])
    def test_allergies_never_lower_the_tier(self, tier, allergies):
        ingredient = _ingredient(safety_level=tier)
        result = classify_ingredient(ingredient.name, ingredient, allergies)
        assert _SEVERITY[result] >= _SEVERITY[SafetyLevel(tier)]

    def test_unknown_irritant_is_caution(self):
        assert classify_ingredient("Alcohol Denat.", None, []) == SafetyLevel.CAUTION
        assert classify_ingredient("Glycolic Acid", None, []) == SafetyLevel.CAUTION

    def test_unknown_plain_ingredient_is_safe(self):
        assert classify_ingredient("Aloe Vera", None, []) == SafetyLevel.SAFE


class TestAnnotateIngredient:
    def test_annotation_keeps_intrinsic_tier(self):
        result = annotate_ingredient("Raw Honey", _ingredient(), ["honey"])
        assert result.safety_level == SafetyLevel.SAFE
        assert result.display_safety == SafetyLevel.WARNING
        assert result.allergy_match is True
        assert result.matched_allergies == ["honey"]
        assert "honey" in result.reason

    def test_no_match_has_no_reason(self):
        result = annotate_ingredient("Raw Honey", _ingredient(), [])
        assert result.allergy_match is False
        assert result.display_safety == SafetyLevel.SAFE
        assert result.reason is None

    def test_direct_reason(self):
        result = annotate_ingredient("Raw Honey", _ingredient(), ["raw honey"])
        assert result.reason == "Listed in your allergies"


# ── Classifier over the catalog ─────────────────────────────────────────────


class TestSafetyClassifier:
    @pytest.mark.anyio
    async def test_catalog_lookup(self, catalog):
        await seed_catalog(catalog)
        classifier = SafetyClassifier(catalog)
        assert await classifier.classify("niacinamide", []) == SafetyLevel.SAFE
        assert await classifier.classify("Retinol", []) == SafetyLevel.CAUTION
        assert await classifier.classify("Fragrance", []) == SafetyLevel.WARNING

    @pytest.mark.anyio
    async def test_catalog_allergen_tags(self, catalog):
        await seed_catalog(catalog)
        classifier = SafetyClassifier(catalog)
        assert await classifier.classify("Tea Tree Oil", ["Essential Oils"]) == SafetyLevel.WARNING
        assert await classifier.classify("Salicylic Acid", ["essential oils"]) == SafetyLevel.SAFE

    @pytest.mark.anyio
    async def test_analyze_whole_catalog(self, catalog):
        await seed_catalog(catalog)
        results = await SafetyClassifier(catalog).analyze(["honey"])
        flagged = [r.name for r in results if r.allergy_match]
        assert flagged == ["Raw Honey"]
        assert len(results) == len(await catalog.list_ingredients())

    @pytest.mark.anyio
    async def test_analyze_named_subset(self, catalog):
        await seed_catalog(catalog)
        results = await SafetyClassifier(catalog).analyze([], names=["retinol", "Aloe Vera"])
        assert [r.name for r in results] == ["Retinol", "Aloe Vera"]
        assert [r.display_safety for r in results] == [SafetyLevel.CAUTION, SafetyLevel.SAFE]
