"""Starter catalog loaded at start-up when `seed_catalog` is enabled."""

import logging

from skinroutine.schemas import IngredientCreate, ProductCreate
from skinroutine.services.catalog import CatalogService

logger = logging.getLogger(__name__)

SEED_INGREDIENTS = [
    IngredientCreate(
        name="Salicylic Acid",
        description="Beta-hydroxy acid for exfoliation",
        benefits=["Unclogs pores", "Reduces acne"],
        safety_level="safe",
    ),
    IngredientCreate(
        name="Niacinamide",
        description="Vitamin B3 derivative",
        benefits=["Reduces pore appearance", "Controls oil"],
        safety_level="safe",
    ),
    IngredientCreate(
        name="Retinol",
        description="Vitamin A derivative for anti-aging",
        benefits=["Reduces fine lines", "Improves texture"],
        warnings=["Sun sensitivity", "Not for pregnant women"],
        safety_level="caution",
    ),
    IngredientCreate(
        name="Fragrance",
        description="Synthetic or natural scent",
        warnings=["May cause irritation"],
        safety_level="warning",
        common_allergens=["sensitive skin"],
    ),
    IngredientCreate(
        name="Hyaluronic Acid",
        description="Humectant for hydration",
        benefits=["Retains moisture", "Plumps skin"],
        safety_level="safe",
    ),
    IngredientCreate(
        name="Raw Honey",
        description="Natural humectant with antibacterial properties",
        benefits=["Soothes skin", "Gentle cleansing"],
        warnings=["Patch test recommended"],
        safety_level="safe",
        common_allergens=["honey", "bee products", "pollen"],
    ),
    IngredientCreate(
        name="Tea Tree Oil",
        description="Essential oil with antimicrobial activity",
        benefits=["Calms breakouts"],
        warnings=["Always dilute before use"],
        safety_level="caution",
        common_allergens=["essential oils", "tea tree"],
    ),
]

SEED_PRODUCTS = [
    ProductCreate(
        name="CeraVe Hydrating Cleanser",
        brand="CeraVe",
        category="Cleanser",
        skin_types=["dry", "sensitive", "normal"],
        concerns=["dryness", "sensitivity"],
        ingredients=["Hyaluronic Acid", "Ceramides"],
        price=1399,
        rating=4,
        instructions="Apply to wet skin, massage gently, rinse thoroughly",
    ),
    ProductCreate(
        name="Honey Oat Cleanser",
        brand="DIY",
        category="Cleanser",
        skin_types=["dry", "sensitive", "normal"],
        concerns=["dryness", "sensitivity", "dullness"],
        ingredients=["Raw Honey", "Ground Oats"],
        price=500,
        rating=4,
        is_home_remedy=True,
        instructions="Mix 2 tbsp honey with 1 tbsp ground oats, apply to face, massage for 1 minute, rinse with warm water",
        warnings=["Patch test recommended for honey allergies"],
    ),
    ProductCreate(
        name="The Ordinary Niacinamide 10% + Zinc 1%",
        brand="The Ordinary",
        category="Serum",
        skin_types=["oily", "combination", "acne-prone"],
        concerns=["acne", "large-pores", "oiliness"],
        ingredients=["Niacinamide", "Zinc"],
        price=699,
        rating=4,
        instructions="Apply 2-3 drops to clean skin before moisturizer",
    ),
    ProductCreate(
        name="CeraVe Renewing SA Cleanser",
        brand="CeraVe",
        category="Cleanser",
        skin_types=["oily", "combination"],
        concerns=["acne", "oiliness", "pores"],
        ingredients=["Salicylic Acid", "Niacinamide", "Hyaluronic Acid"],
        price=1499,
        rating=5,
        instructions="Massage onto damp skin for 30 seconds, rinse",
    ),
    ProductCreate(
        name="Diluted Tea Tree Spot Serum",
        brand="DIY",
        category="Serum",
        skin_types=["oily", "combination"],
        concerns=["acne"],
        ingredients=["Tea Tree Oil", "Jojoba Oil"],
        price=300,
        rating=3,
        is_home_remedy=True,
        instructions="Mix 2 drops tea tree oil into 1 tsp jojoba oil, dab onto blemishes",
        warnings=["Never apply tea tree oil undiluted"],
    ),
]


async def seed_catalog(catalog: CatalogService) -> bool:
    """Fill whichever of ingredients and products is still empty. Returns True if anything was added."""
    seeded = False

    if await catalog.list_ingredients():
        logger.info("Ingredients already present, skipping ingredient seed")
    else:
        for ingredient in SEED_INGREDIENTS:
            await catalog.add_ingredient(ingredient)
        logger.info(f"Seeded {len(SEED_INGREDIENTS)} ingredients")
        seeded = True

    if await catalog.query_products():
        logger.info("Products already present, skipping product seed")
    else:
        for product in SEED_PRODUCTS:
            await catalog.add_product(product)
        logger.info(f"Seeded {len(SEED_PRODUCTS)} products")
        seeded = True

    return seeded
