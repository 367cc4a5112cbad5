"""
Routine Composer — turns a skin profile into a morning/evening plan.

The step shape is fixed by the templates below; the catalog only decides which
products fill the Cleanser and Serum steps. Seasonal advice comes from a table
keyed by season.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from skinroutine.errors import ValidationError
from skinroutine.schemas import (
    Adjustment,
    Assessment,
    GeneratedRoutine,
    PreferenceType,
    Product,
    ProductCategory,
    ProductFilter,
    ProductType,
    RoutineStep,
    Season,
    SeasonalAdjustment,
    SkinProfile,
    StepProduct,
)
from skinroutine.services.catalog import CatalogService

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS_PER_STEP = 2


@dataclass(frozen=True)
class StepTemplate:
    title: str
    description: str
    category: Optional[ProductCategory] = None  # None: no catalog population


MORNING_TEMPLATE = (
    StepTemplate(
        "Gentle Cleanser",
        "Remove overnight buildup with a hydrating cleanser",
        ProductCategory.CLEANSER,
    ),
    StepTemplate(
        "Treatment Serum",
        "Target specific concerns with active ingredients",
        ProductCategory.SERUM,
    ),
    StepTemplate("Moisturizer", "Lock in hydration and create protective barrier"),
    StepTemplate("Sunscreen (SPF 30+)", "Essential UV protection - never skip!"),
)

EVENING_TEMPLATE = (
    StepTemplate(
        "Double Cleanse",
        "Remove makeup and sunscreen thoroughly",
        ProductCategory.CLEANSER,
    ),
    StepTemplate(
        "Treatment Serum",
        "Target specific concerns with active ingredients",
        ProductCategory.SERUM,
    ),
    StepTemplate("Night Moisturizer", "Rich hydration for overnight repair"),
)

SEASONAL_ADJUSTMENTS: Dict[Season, List[Adjustment]] = {
    Season.WINTER: [
        Adjustment(
            step_title="Moisturizer",
            modification="Use extra hydrating formula",
            reason="Winter air is drier and can dehydrate skin",
        ),
    ],
    Season.SUMMER: [
        Adjustment(
            step_title="Moisturizer",
            modification="Switch to a lightweight, oil-free gel and reapply SPF every two hours outdoors",
            reason="Heat and humidity raise oil production while UV exposure peaks",
        ),
    ],
    Season.FALL: [
        Adjustment(
            step_title="Moisturizer",
            modification="Choose a barrier-repair formula with ceramides",
            reason="Repair summer sun damage and prepare skin for colder, drier air",
        ),
    ],
    Season.SPRING: [
        Adjustment(
            step_title="Moisturizer",
            modification="Move to a lighter lotion and add gentle exfoliation once or twice a week",
            reason="Rising humidity means less need for rich creams, and exfoliation clears winter dullness",
        ),
    ],
}


def product_sort_key(product: Product):
    """Rating descending (unrated last), then name, then id."""
    rating = product.rating if product.rating is not None else 0
    return (-rating, product.name.casefold(), product.id)


def to_step_product(product: Product) -> StepProduct:
    return StepProduct(
        id=product.id,
        name=product.name,
        type=ProductType.HOME_REMEDY if product.is_home_remedy else ProductType.COMMERCIAL,
        instructions=product.instructions,
    )


def seasonal_adjustments_for(season: Season) -> SeasonalAdjustment:
    adjustments = SEASONAL_ADJUSTMENTS.get(season, [])
    return SeasonalAdjustment(season=season, adjustments=[a.model_copy() for a in adjustments])


class RoutineComposer:
    def __init__(self, catalog: CatalogService, max_products_per_step: int = DEFAULT_PRODUCTS_PER_STEP):
        self.catalog = catalog
        self.max_products_per_step = max_products_per_step

    async def generate(
        self,
        assessment: Union[SkinProfile, Assessment],
        preference_type: PreferenceType,
        season: Season,
    ) -> GeneratedRoutine:
        """Build a fresh routine. Pure with respect to catalog and user state."""
        skin_type, concerns = self._validate(assessment)
        try:
            preference_type = PreferenceType(preference_type)
        except ValueError:
            raise ValidationError.for_field("preferenceType", f"Unknown preference type: {preference_type}")
        try:
            season = Season(season)
        except ValueError:
            raise ValidationError.for_field("season", f"Unknown season: {season}")

        products = await self.catalog.query_products(
            ProductFilter(
                skin_types=[skin_type],
                concerns=concerns,
                is_home_remedy=preference_type == PreferenceType.HOME_REMEDIES,
            )
        )
        products = sorted(products, key=product_sort_key)
        logger.info(
            f"Generating {preference_type.value} routine for {skin_type} skin "
            f"({season.value}) from {len(products)} matching products"
        )

        return GeneratedRoutine(
            morning_steps=self._build_steps(MORNING_TEMPLATE, products),
            evening_steps=self._build_steps(EVENING_TEMPLATE, products),
            seasonal_adjustments=seasonal_adjustments_for(season),
        )

    def _build_steps(self, template: Sequence[StepTemplate], products: List[Product]) -> List[RoutineStep]:
        steps = []
        for number, step in enumerate(template, start=1):
            picked: List[StepProduct] = []
            if step.category is not None:
                matching = [p for p in products if p.category == step.category]
                picked = [to_step_product(p) for p in matching[: self.max_products_per_step]]
            steps.append(
                RoutineStep(
                    step_number=number,
                    title=step.title,
                    description=step.description,
                    products=picked,
                )
            )
        return steps

    @staticmethod
    def _validate(assessment) -> Tuple[str, List[str]]:
        errors = []
        skin_type = getattr(assessment, "skin_type", None)
        if hasattr(skin_type, "value"):
            skin_type = skin_type.value
        if not skin_type or not str(skin_type).strip():
            errors.append({"field": "assessment.skinType", "message": "Skin type is required"})
        concerns = [c for c in getattr(assessment, "concerns", None) or [] if c and c.strip()]
        if not concerns:
            errors.append({"field": "assessment.concerns", "message": "At least one concern is required"})
        if errors:
            raise ValidationError(errors=errors)
        return str(skin_type).strip(), [c.strip() for c in concerns]
