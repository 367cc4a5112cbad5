"""Storage interface consumed by every service.

Backends implement create/read/update/delete per entity type. Ids are assigned
by the backend on create; lookups that miss return None rather than raising.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

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


def new_id() -> str:
    return str(uuid.uuid4())


class Storage(ABC):
    """Abstract storage for users, assessments, routines and the catalog."""

    async def startup(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def shutdown(self) -> None:
        """Release backend resources."""

    # ── Users ────────────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, username: str, email: str, password_hash: str) -> User: ...

    @abstractmethod
    async def update_user_allergies(self, user_id: str, allergies: List[str]) -> Optional[User]: ...

    # ── Assessments ──────────────────────────────────────────────────────────

    @abstractmethod
    async def create_assessment(self, data: AssessmentCreate, user_id: str) -> Assessment: ...

    @abstractmethod
    async def get_assessment(self, assessment_id: str) -> Optional[Assessment]: ...

    @abstractmethod
    async def list_assessments_for_user(self, user_id: str) -> List[Assessment]: ...

    # ── Routines ─────────────────────────────────────────────────────────────

    @abstractmethod
    async def create_routine(self, data: RoutineCreate, user_id: str, assessment_id: str) -> Routine: ...

    @abstractmethod
    async def get_routine(self, routine_id: str) -> Optional[Routine]: ...

    @abstractmethod
    async def list_routines_for_user(self, user_id: str) -> List[Routine]: ...

    @abstractmethod
    async def update_routine_active(self, routine_id: str, is_active: bool) -> Optional[Routine]: ...

    @abstractmethod
    async def delete_routine(self, routine_id: str) -> bool: ...

    # ── Catalog ──────────────────────────────────────────────────────────────

    @abstractmethod
    async def create_product(self, data: ProductCreate) -> Product: ...

    @abstractmethod
    async def get_product(self, product_id: str) -> Optional[Product]: ...

    @abstractmethod
    async def query_products(self, product_filter: ProductFilter) -> List[Product]: ...

    @abstractmethod
    async def create_ingredient(self, data: IngredientCreate) -> Ingredient:
        """Raises ConflictError if the name is taken, ignoring case."""

    @abstractmethod
    async def get_ingredient_by_name(self, name: str) -> Optional[Ingredient]: ...

    @abstractmethod
    async def list_ingredients(self) -> List[Ingredient]: ...
