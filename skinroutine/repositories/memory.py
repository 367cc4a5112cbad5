"""Map-backed storage. Each entity type lives in its own dict keyed by id.

Records go in and come out as deep copies, so callers never share mutable
state with the store.
"""

from typing import Dict, List, Optional, TypeVar

from pydantic import BaseModel

from skinroutine.errors import ConflictError
from skinroutine.repositories.base import Storage, new_id
from skinroutine.schemas import (
    Assessment,
    AssessmentCreate,
    Ingredient,
    IngredientCreate,
    Product,
    ProductCreate,
    ProductFilter,
    Routine,
    RoutineCreate,
    User,
)

M = TypeVar("M", bound=BaseModel)


def _copy(record: Optional[M]) -> Optional[M]:
    return record.model_copy(deep=True) if record is not None else None


class MemoryStorage(Storage):
    """In-process storage; contents are lost on restart."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.assessments: Dict[str, Assessment] = {}
        self.routines: Dict[str, Routine] = {}
        self.products: Dict[str, Product] = {}
        self.ingredients: Dict[str, Ingredient] = {}

    # Users

    async def get_user(self, user_id: str) -> Optional[User]:
        return _copy(self.users.get(user_id))

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return _copy(next((u for u in self.users.values() if u.username == username), None))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return _copy(next((u for u in self.users.values() if u.email == email), None))

    async def create_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(id=new_id(), username=username, email=email, password_hash=password_hash)
        self.users[user.id] = user
        return _copy(user)

    async def update_user_allergies(self, user_id: str, allergies: List[str]) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update={"allergies": list(allergies)})
        self.users[user_id] = updated
        return _copy(updated)

    # Assessments

    async def create_assessment(self, data: AssessmentCreate, user_id: str) -> Assessment:
        assessment = Assessment(id=new_id(), user_id=user_id, **data.model_dump())
        self.assessments[assessment.id] = assessment
        return _copy(assessment)

    async def get_assessment(self, assessment_id: str) -> Optional[Assessment]:
        return _copy(self.assessments.get(assessment_id))

    async def list_assessments_for_user(self, user_id: str) -> List[Assessment]:
        return [_copy(a) for a in self.assessments.values() if a.user_id == user_id]

    # Routines

    async def create_routine(self, data: RoutineCreate, user_id: str, assessment_id: str) -> Routine:
        routine = Routine(
            id=new_id(),
            user_id=user_id,
            assessment_id=assessment_id,
            **data.model_dump(),
        )
        self.routines[routine.id] = routine
        return _copy(routine)

    async def get_routine(self, routine_id: str) -> Optional[Routine]:
        return _copy(self.routines.get(routine_id))

    async def list_routines_for_user(self, user_id: str) -> List[Routine]:
        return [_copy(r) for r in self.routines.values() if r.user_id == user_id]

    async def update_routine_active(self, routine_id: str, is_active: bool) -> Optional[Routine]:
        routine = self.routines.get(routine_id)
        if not routine:
            return None
        updated = routine.model_copy(update={"is_active": is_active})
        self.routines[routine_id] = updated
        return _copy(updated)

    async def delete_routine(self, routine_id: str) -> bool:
        return self.routines.pop(routine_id, None) is not None

    # Catalog

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(id=new_id(), **data.model_dump())
        self.products[product.id] = product
        return _copy(product)

    async def get_product(self, product_id: str) -> Optional[Product]:
        return _copy(self.products.get(product_id))

    async def query_products(self, product_filter: ProductFilter) -> List[Product]:
        return [_copy(p) for p in self.products.values() if product_filter.matches(p)]

    async def create_ingredient(self, data: IngredientCreate) -> Ingredient:
        if await self.get_ingredient_by_name(data.name):
            raise ConflictError(f"Ingredient already exists: {data.name}")
        ingredient = Ingredient(id=new_id(), **data.model_dump())
        self.ingredients[ingredient.id] = ingredient
        return _copy(ingredient)

    async def get_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        key = name.strip().lower()
        return _copy(next((i for i in self.ingredients.values() if i.name.lower() == key), None))

    async def list_ingredients(self) -> List[Ingredient]:
        return [_copy(i) for i in self.ingredients.values()]
