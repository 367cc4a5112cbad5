from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from skinroutine.dependencies import Services, get_services
from skinroutine.errors import NotFoundError
from skinroutine.schemas import Ingredient, Product, ProductFilter

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=List[Product])
async def list_products(
    skin_types: Optional[List[str]] = Query(None, alias="skinTypes"),
    concerns: Optional[List[str]] = Query(None),
    category: Optional[str] = Query(None),
    is_home_remedy: Optional[bool] = Query(None, alias="isHomeRemedy"),
    services: Services = Depends(get_services),
):
    product_filter = ProductFilter(
        skin_types=skin_types,
        concerns=concerns,
        category=category,
        is_home_remedy=is_home_remedy,
    )
    return await services.catalog.query_products(product_filter)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, services: Services = Depends(get_services)):
    product = await services.catalog.get_product(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


@router.get("/ingredients", response_model=List[Ingredient])
async def list_ingredients(services: Services = Depends(get_services)):
    return await services.catalog.list_ingredients()


@router.get("/ingredients/{name}", response_model=Ingredient)
async def get_ingredient(name: str, services: Services = Depends(get_services)):
    ingredient = await services.catalog.get_ingredient_by_name(name)
    if not ingredient:
        raise NotFoundError("Ingredient not found")
    return ingredient
