"""
Routine composer tests — step shape, product selection and seasonal advice.
"""

import pytest

from skinroutine.errors import ValidationError
from skinroutine.schemas import (
    Assessment,
    PreferenceType,
    ProductCreate,
    ProductType,
    Season,
    SkinProfile,
)
from skinroutine.seed import seed_catalog
from skinroutine.services.routine_composer import (
    EVENING_TEMPLATE,
    MORNING_TEMPLATE,
    SEASONAL_ADJUSTMENTS,
    RoutineComposer,
)


def _profile(**overrides) -> SkinProfile:
    defaults = dict(
        skin_type="oily",
        concerns=["acne"],
        age_range="25-34",
        budget="medium",
        time_available="moderate",
    )
    defaults.update(overrides)
    return SkinProfile(**defaults)


def _cleanser(name, rating=None, **overrides) -> ProductCreate:
    defaults = dict(
        name=name,
        brand="Test",
        category="Cleanser",
        skin_types=["oily"],
        concerns=["acne"],
        rating=rating,
    )
    defaults.update(overrides)
    return ProductCreate(**defaults)


def _product_names(step):
    return [p.name for p in step.products]


# ── Step shape ──────────────────────────────────────────────────────────────


class TestRoutineShape:
    @pytest.mark.anyio
    async def test_oily_acne_summer_products(self, catalog):
        await seed_catalog(catalog)
        routine = await RoutineComposer(catalog).generate(_profile(), PreferenceType.PRODUCTS, Season.SUMMER)

        assert [s.title for s in routine.morning_steps] == [
            "Gentle Cleanser",
            "Treatment Serum",
            "Moisturizer",
            "Sunscreen (SPF 30+)",
        ]
        assert [s.title for s in routine.evening_steps] == [
            "Double Cleanse",
            "Treatment Serum",
            "Night Moisturizer",
        ]
        assert _product_names(routine.morning_steps[0]) == ["CeraVe Renewing SA Cleanser"]
        assert _product_names(routine.morning_steps[1]) == ["The Ordinary Niacinamide 10% + Zinc 1%"]
        assert routine.morning_steps[1].products[0].type == ProductType.COMMERCIAL
        assert routine.morning_steps[2].products == []
        assert routine.morning_steps[3].products == []
        assert _product_names(routine.evening_steps[0]) == ["CeraVe Renewing SA Cleanser"]
        assert routine.evening_steps[2].products == []
        assert routine.seasonal_adjustments.season == Season.SUMMER
        assert len(routine.seasonal_adjustments.adjustments) == 1

    @pytest.mark.anyio
    async def test_step_numbers_are_contiguous(self, catalog):
        routine = await RoutineComposer(catalog).generate(_profile(), "products", "winter")
        assert [s.step_number for s in routine.morning_steps] == [1, 2, 3, 4]
        assert [s.step_number for s in routine.evening_steps] == [1, 2, 3]

    @pytest.mark.anyio
    async def test_empty_catalog_keeps_shape(self, catalog):
        routine = await RoutineComposer(catalog).generate(_profile(), "products", "winter")
        assert len(routine.morning_steps) == len(MORNING_TEMPLATE)
        assert len(routine.evening_steps) == len(EVENING_TEMPLATE)
        assert all(not s.products for s in routine.morning_steps + routine.evening_steps)

    @pytest.mark.anyio
    async def test_same_inputs_same_routine(self, catalog):
        await seed_catalog(catalog)
        composer = RoutineComposer(catalog)
        first = await composer.generate(_profile(), "products", "fall")
        second = await composer.generate(_profile(), "products", "fall")
        assert first.model_dump() == second.model_dump()

    @pytest.mark.anyio
    async def test_accepts_stored_assessment(self, catalog):
        await seed_catalog(catalog)
        assessment = Assessment(
            id="a-1",
            user_id="u-1",
            skin_type="oily",
            concerns=["acne"],
            age_range="25-34",
            budget="medium",
            time_available="quick",
        )
        routine = await RoutineComposer(catalog).generate(assessment, "products", "spring")
        assert _product_names(routine.morning_steps[0]) == ["CeraVe Renewing SA Cleanser"]


# ── Product selection ───────────────────────────────────────────────────────


class TestProductSelection:
    @pytest.mark.anyio
    async def test_home_remedies_only(self, catalog):
        await seed_catalog(catalog)
        routine = await RoutineComposer(catalog).generate(_profile(), "home-remedies", "summer")
        serum = routine.morning_steps[1]
        assert _product_names(serum) == ["Diluted Tea Tree Spot Serum"]
        assert serum.products[0].type == ProductType.HOME_REMEDY
        assert serum.products[0].instructions
        # Honey Oat Cleanser is for dry/sensitive skin
        assert routine.morning_steps[0].products == []

    @pytest.mark.anyio
    async def test_mixed_uses_commercial_products(self, catalog):
        await seed_catalog(catalog)
        composer = RoutineComposer(catalog)
        mixed = await composer.generate(_profile(), "mixed", "summer")
        products = await composer.generate(_profile(), "products", "summer")
        assert mixed.model_dump() == products.model_dump()
        assert all(
            p.type == ProductType.COMMERCIAL
            for step in mixed.morning_steps
            for p in step.products
        )

    @pytest.mark.anyio
    async def test_at_most_two_per_step_by_rating(self, catalog):
        for product in (
            _cleanser("Cleanser C", rating=3),
            _cleanser("Cleanser A", rating=5),
            _cleanser("Cleanser B", rating=4),
        ):
            await catalog.add_product(product)
        routine = await RoutineComposer(catalog).generate(_profile(), "products", "winter")
        assert _product_names(routine.morning_steps[0]) == ["Cleanser A", "Cleanser B"]
        assert _product_names(routine.evening_steps[0]) == ["Cleanser A", "Cleanser B"]

    @pytest.mark.anyio
    async def test_ties_break_on_name_and_unrated_last(self, catalog):
        for product in (
            _cleanser("zeta wash"),
            _cleanser("Beta Wash", rating=4),
            _cleanser("alpha wash", rating=4),
        ):
            await catalog.add_product(product)
        routine = await RoutineComposer(catalog, max_products_per_step=3).generate(
            _profile(), "products", "winter"
        )
        assert _product_names(routine.morning_steps[0]) == ["alpha wash", "Beta Wash", "zeta wash"]

    @pytest.mark.anyio
    async def test_products_per_step_is_configurable(self, catalog):
        await catalog.add_product(_cleanser("One", rating=5))
        await catalog.add_product(_cleanser("Two", rating=4))
        routine = await RoutineComposer(catalog, max_products_per_step=1).generate(
            _profile(), "products", "winter"
        )
        assert _product_names(routine.morning_steps[0]) == ["One"]

    @pytest.mark.anyio
    async def test_any_concern_overlap_qualifies(self, catalog):
        await catalog.add_product(_cleanser("Pore Wash", concerns=["pores"]))
        routine = await RoutineComposer(catalog).generate(
            _profile(concerns=["dullness", "pores"]), "products", "winter"
        )
        assert _product_names(routine.morning_steps[0]) == ["Pore Wash"]


# ── Seasonal adjustments ────────────────────────────────────────────────────


class TestSeasonalAdjustments:
    @pytest.mark.anyio
    async def test_winter_hydration(self, catalog):
        routine = await RoutineComposer(catalog).generate(_profile(), "products", "winter")
        adjustment = routine.seasonal_adjustments.adjustments[0]
        assert adjustment.step_title == "Moisturizer"
        assert adjustment.modification == "Use extra hydrating formula"
        assert adjustment.reason == "Winter air is drier and can dehydrate skin"

    def test_every_season_has_advice(self):
        assert set(SEASONAL_ADJUSTMENTS) == set(Season)

    def test_advice_targets_existing_steps(self):
        titles = {s.title for s in MORNING_TEMPLATE + EVENING_TEMPLATE}
        for adjustments in SEASONAL_ADJUSTMENTS.values():
            assert all(a.step_title in titles for a in adjustments)


# ── Input validation ────────────────────────────────────────────────────────


class TestValidation:
    @pytest.mark.anyio
    async def test_missing_skin_type(self, catalog):
        with pytest.raises(ValidationError) as exc_info:
            await RoutineComposer(catalog).generate(_profile(skin_type=None), "products", "winter")
        assert [e["field"] for e in exc_info.value.errors] == ["assessment.skinType"]

    @pytest.mark.anyio
    async def test_blank_concerns(self, catalog):
        with pytest.raises(ValidationError) as exc_info:
            await RoutineComposer(catalog).generate(_profile(concerns=["  "]), "products", "winter")
        assert [e["field"] for e in exc_info.value.errors] == ["assessment.concerns"]

    @pytest.mark.anyio
    async def test_both_missing_reported_together(self, catalog):
        with pytest.raises(ValidationError) as exc_info:
            await RoutineComposer(catalog).generate(_profile(skin_type="", concerns=[]), "products", "winter")
        assert [e["field"] for e in exc_info.value.errors] == ["assessment.skinType", "assessment.concerns"]

    @pytest.mark.anyio
    async def test_unknown_season(self, catalog):
        with pytest.raises(ValidationError) as exc_info:
            await RoutineComposer(catalog).generate(_profile(), "products", "monsoon")
        assert exc_info.value.errors[0]["field"] == "season"

    @pytest.mark.anyio
    async def test_unknown_preference(self, catalog):
        with pytest.raises(ValidationError) as exc_info:
            await RoutineComposer(catalog).generate(_profile(), "anything", "winter")
        assert exc_info.value.errors[0]["field"] == "preferenceType"
