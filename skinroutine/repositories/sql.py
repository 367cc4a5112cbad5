"""
SQLAlchemy storage — all DB access in one place.

One session per storage call. SQLAlchemy failures are logged and re-raised as
InternalError; unique-constraint violations surface as ConflictError.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from skinroutine.database import init_db, make_sessionmaker
from skinroutine.errors import ConflictError, InternalError
from skinroutine.models import db as models
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

logger = logging.getLogger(__name__)


def _columns(row) -> Dict[str, Any]:
    return {c.name: getattr(row, c.name) for c in row.__table__.columns}


def _to_user(row: models.User) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        allergies=list(row.allergies or []),
    )


def _to_assessment(row: models.Assessment) -> Assessment:
    data = _columns(row)
    data.pop("created_at", None)
    data["lifestyle"] = data.get("lifestyle") or {}
    return Assessment(**data)


def _to_routine(row: models.Routine) -> Routine:
    data = _columns(row)
    data.pop("created_at", None)
    return Routine(**data)


def _to_product(row: models.Product) -> Product:
    data = _columns(row)
    data["warnings"] = data.get("warnings") or []
    return Product(**data)


def _to_ingredient(row: models.Ingredient) -> Ingredient:
    data = _columns(row)
    data.pop("name_key", None)
    for key in ("benefits", "warnings", "common_allergens"):
        data[key] = data.get(key) or []
    return Ingredient(**data)


class SqlStorage(Storage):
    """Storage backed by any SQLAlchemy async engine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessionmaker = make_sessionmaker(engine)

    async def startup(self) -> None:
        await init_db(self.engine)

    async def shutdown(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def _session(self, action: str, conflict: Optional[str] = None) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            try:
                yield session
            except (ConflictError, InternalError):
                await session.rollback()
                raise
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"Unique constraint hit while trying to {action}")
                raise ConflictError(conflict or f"Conflict while trying to {action}") from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Storage failure while trying to {action}: {str(e)}")
                raise InternalError(f"Failed to {action}") from e

    async def _get(self, model: Type, id: str):
        async with self._session(f"load {model.__tablename__}") as db:
            return await db.get(model, id)

    async def _add(self, row, action: str, conflict: Optional[str] = None):
        async with self._session(action, conflict) as db:
            db.add(row)
            await db.commit()
            await db.refresh(row)
            return row

    async def _list_where(self, model: Type, *criteria) -> list:
        async with self._session(f"list {model.__tablename__}") as db:
            stmt = select(model)
            if criteria:
                stmt = stmt.where(*criteria)
            result = await db.execute(stmt)
            return list(result.scalars().all())

    # ── Users ────────────────────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[User]:
        row = await self._get(models.User, user_id)
        return _to_user(row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        rows = await self._list_where(models.User, models.User.username == username)
        return _to_user(rows[0]) if rows else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        rows = await self._list_where(models.User, models.User.email == email)
        return _to_user(rows[0]) if rows else None

    async def create_user(self, username: str, email: str, password_hash: str) -> User:
        row = models.User(
            id=new_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            allergies=[],
        )
        row = await self._add(row, "create user", conflict="Username or email already registered")
        return _to_user(row)

    async def update_user_allergies(self, user_id: str, allergies: List[str]) -> Optional[User]:
        async with self._session("update allergies") as db:
            row = await db.get(models.User, user_id)
            if not row:
                return None
            row.allergies = list(allergies)
            await db.commit()
            await db.refresh(row)
            return _to_user(row)

    # ── Assessments ──────────────────────────────────────────────────────────

    async def create_assessment(self, data: AssessmentCreate, user_id: str) -> Assessment:
        row = models.Assessment(
            id=new_id(),
            user_id=user_id,
            skin_type=data.skin_type.value,
            concerns=list(data.concerns),
            age_range=data.age_range,
            budget=data.budget,
            time_available=data.time_available.value,
            lifestyle=dict(data.lifestyle),
        )
        return _to_assessment(await self._add(row, "create assessment"))

    async def get_assessment(self, assessment_id: str) -> Optional[Assessment]:
        row = await self._get(models.Assessment, assessment_id)
        return _to_assessment(row) if row else None

    async def list_assessments_for_user(self, user_id: str) -> List[Assessment]:
        rows = await self._list_where(models.Assessment, models.Assessment.user_id == user_id)
        return [_to_assessment(r) for r in rows]

    # ── Routines ─────────────────────────────────────────────────────────────

    async def create_routine(self, data: RoutineCreate, user_id: str, assessment_id: str) -> Routine:
        payload = data.model_dump(mode="json", by_alias=True)
        row = models.Routine(
            id=new_id(),
            user_id=user_id,
            assessment_id=assessment_id,
            name=data.name,
            season=data.season.value,
            preference_type=data.preference_type.value,
            morning_steps=payload["morningSteps"],
            evening_steps=payload["eveningSteps"],
            is_active=data.is_active,
        )
        return _to_routine(await self._add(row, "create routine"))

    async def get_routine(self, routine_id: str) -> Optional[Routine]:
        row = await self._get(models.Routine, routine_id)
        return _to_routine(row) if row else None

    async def list_routines_for_user(self, user_id: str) -> List[Routine]:
        rows = await self._list_where(models.Routine, models.Routine.user_id == user_id)
        return [_to_routine(r) for r in rows]

    async def update_routine_active(self, routine_id: str, is_active: bool) -> Optional[Routine]:
        async with self._session("update routine") as db:
            row = await db.get(models.Routine, routine_id)
            if not row:
                return None
            row.is_active = is_active
            await db.commit()
            await db.refresh(row)
            return _to_routine(row)

    async def delete_routine(self, routine_id: str) -> bool:
        async with self._session("delete routine") as db:
            row = await db.get(models.Routine, routine_id)
            if not row:
                return False
            await db.delete(row)
            await db.commit()
            return True

    # ── Catalog ──────────────────────────────────────────────────────────────

    async def create_product(self, data: ProductCreate) -> Product:
        fields = data.model_dump()
        fields["category"] = data.category.value
        row = models.Product(id=new_id(), **fields)
        return _to_product(await self._add(row, "create product"))

    async def get_product(self, product_id: str) -> Optional[Product]:
        row = await self._get(models.Product, product_id)
        return _to_product(row) if row else None

    async def query_products(self, product_filter: ProductFilter) -> List[Product]:
        # Set-intersection on JSON columns isn't portable; narrow in SQL where
        # possible and apply the full filter in Python.
        criteria = []
        if product_filter.category is not None:
            criteria.append(models.Product.category == product_filter.category)
        if product_filter.is_home_remedy is not None:
            criteria.append(models.Product.is_home_remedy == product_filter.is_home_remedy)
        rows = await self._list_where(models.Product, *criteria)
        products = [_to_product(r) for r in rows]
        return [p for p in products if product_filter.matches(p)]

    async def create_ingredient(self, data: IngredientCreate) -> Ingredient:
        if await self.get_ingredient_by_name(data.name):
            raise ConflictError(f"Ingredient already exists: {data.name}")
        fields = data.model_dump()
        fields["safety_level"] = data.safety_level.value
        row = models.Ingredient(id=new_id(), name_key=data.name.lower(), **fields)
        row = await self._add(row, "create ingredient", conflict=f"Ingredient already exists: {data.name}")
        return _to_ingredient(row)

    async def get_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        key = name.strip().lower()
        rows = await self._list_where(models.Ingredient, models.Ingredient.name_key == key)
        return _to_ingredient(rows[0]) if rows else None

    async def list_ingredients(self) -> List[Ingredient]:
        rows = await self._list_where(models.Ingredient)
        return [_to_ingredient(r) for r in rows]
