"""
Safety Classifier — ingredient safety tier, personalized by allergies.

Priority order, first match wins:
  1. the user lists the ingredient itself as an allergy        -> warning
  2. a catalog allergen tag overlaps a user allergy (substring) -> warning
  3. the ingredient's intrinsic catalog tier

Allergies only ever escalate; the catalog tier is the floor.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from skinroutine.schemas import Ingredient, IngredientSafety, SafetyLevel
from skinroutine.services.catalog import CatalogService

logger = logging.getLogger(__name__)

# Fallback for names missing from the catalog.
IRRITANTS = ("fragrance", "alcohol denat", "essential oils", "citrus extracts")
STRONG_ACTIVES = ("retinol", "tretinoin", "glycolic acid", "lactic acid")

RULE_DIRECT = "direct"
RULE_ALLERGEN = "allergen"


def _normalize(allergies: Iterable[str]) -> List[str]:
    return [a.strip().lower() for a in allergies or [] if a and a.strip()]


def match_allergies(
    name: str, ingredient: Optional[Ingredient], allergies: Iterable[str]
) -> Tuple[Optional[str], List[str]]:
    """Return (rule, matched allergies); rule is None when nothing matched."""
    normalized = _normalize(allergies)
    name_key = name.strip().lower()

    if name_key in normalized:
        return RULE_DIRECT, [name_key]

    if ingredient is not None:
        allergens = [t.strip().lower() for t in ingredient.common_allergens if t and t.strip()]
        matched = [
            allergy
            for allergy in normalized
            if any(allergy in tag or tag in allergy for tag in allergens)
        ]
        if matched:
            return RULE_ALLERGEN, matched

    return None, []


def intrinsic_level(name: str, ingredient: Optional[Ingredient]) -> SafetyLevel:
    if ingredient is not None:
        return ingredient.safety_level
    name_key = name.strip().lower()
    if any(term in name_key for term in IRRITANTS + STRONG_ACTIVES):
        return SafetyLevel.CAUTION
    return SafetyLevel.SAFE


def classify_ingredient(name: str, ingredient: Optional[Ingredient], allergies: Iterable[str]) -> SafetyLevel:
    rule, _ = match_allergies(name, ingredient, allergies)
    if rule is not None:
        return SafetyLevel.WARNING
    return intrinsic_level(name, ingredient)


def annotate_ingredient(name: str, ingredient: Optional[Ingredient], allergies: Iterable[str]) -> IngredientSafety:
    rule, matched = match_allergies(name, ingredient, allergies)
    level = intrinsic_level(name, ingredient)

    reason = None
    if rule == RULE_DIRECT:
        reason = "Listed in your allergies"
    elif rule == RULE_ALLERGEN:
        reason = f"Potential allergen based on your profile ({', '.join(matched)})"

    return IngredientSafety(
        name=ingredient.name if ingredient else name,
        description=ingredient.description if ingredient else None,
        safety_level=level,
        display_safety=SafetyLevel.WARNING if rule else level,
        allergy_match=rule is not None,
        matched_allergies=matched,
        reason=reason,
    )


class SafetyClassifier:
    """Looks ingredients up in the catalog and applies the rules above."""

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog

    async def classify(self, ingredient_name: str, user_allergies: Iterable[str]) -> SafetyLevel:
        ingredient = await self.catalog.get_ingredient_by_name(ingredient_name)
        return classify_ingredient(ingredient_name, ingredient, user_allergies)

    async def annotate(self, ingredient_name: str, user_allergies: Iterable[str]) -> IngredientSafety:
        ingredient = await self.catalog.get_ingredient_by_name(ingredient_name)
        return annotate_ingredient(ingredient_name, ingredient, user_allergies)

    async def analyze(
        self, user_allergies: Iterable[str], names: Optional[List[str]] = None
    ) -> List[IngredientSafety]:
        """Annotate the given names, or the whole ingredient catalog."""
        allergies = list(user_allergies or [])
        if names is None:
            ingredients = await self.catalog.list_ingredients()
            results = [annotate_ingredient(i.name, i, allergies) for i in ingredients]
        else:
            results = [await self.annotate(n, allergies) for n in names]

        flagged = sum(1 for r in results if r.allergy_match)
        if flagged:
            logger.info(f"Safety analysis flagged {flagged} of {len(results)} ingredients")
        return results
