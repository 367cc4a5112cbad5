from skinroutine.models.db import Assessment, Ingredient, Product, Routine, User

__all__ = [
    "User",
    "Assessment",
    "Routine",
    "Product",
    "Ingredient",
]
