"""
Catalog Store — products and ingredients shared by every user.

Read-only from the point of view of routine generation; `add_*` is used by the
seed loader and admin tooling.
"""

import logging
from typing import List, Optional

from skinroutine.repositories.base import Storage
from skinroutine.schemas import Ingredient, IngredientCreate, Product, ProductCreate, ProductFilter

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def query_products(self, product_filter: Optional[ProductFilter] = None) -> List[Product]:
        """Products matching every present filter field. No ordering guarantee."""
        return await self.storage.query_products(product_filter or ProductFilter())

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.storage.get_product(product_id)

    async def get_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        """Case-insensitive match on the whole name."""
        if not name or not name.strip():
            return None
        return await self.storage.get_ingredient_by_name(name)

    async def list_ingredients(self) -> List[Ingredient]:
        return await self.storage.list_ingredients()

    async def add_product(self, data: ProductCreate) -> Product:
        product = await self.storage.create_product(data)
        logger.info(f"Added product: {product.name} ({product.category.value})")
        return product

    async def add_ingredient(self, data: IngredientCreate) -> Ingredient:
        ingredient = await self.storage.create_ingredient(data)
        logger.info(f"Added ingredient: {ingredient.name}")
        return ingredient
