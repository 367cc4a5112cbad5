"""
Pydantic schemas — the single source of truth for all data contracts.

Attributes are snake_case in Python and camelCase on the wire; every schema
accepts either spelling on input.
"""

from __future__ import annotations

import enum
from typing import Dict, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _unique(values: list[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


# ── Enums ────────────────────────────────────────────────────────────────────


class SkinType(str, enum.Enum):
    OILY = "oily"
    DRY = "dry"
    COMBINATION = "combination"
    SENSITIVE = "sensitive"


class TimeAvailable(str, enum.Enum):
    QUICK = "quick"
    MODERATE = "moderate"
    EXTENSIVE = "extensive"


class Season(str, enum.Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class PreferenceType(str, enum.Enum):
    HOME_REMEDIES = "home-remedies"
    PRODUCTS = "products"
    MIXED = "mixed"


class ProductCategory(str, enum.Enum):
    CLEANSER = "Cleanser"
    TONER = "Toner"
    SERUM = "Serum"
    MOISTURIZER = "Moisturizer"
    SUNSCREEN = "Sunscreen"
    MASK = "Mask"
    EXFOLIANT = "Exfoliant"


class ProductType(str, enum.Enum):
    HOME_REMEDY = "home-remedy"
    COMMERCIAL = "commercial"


class SafetyLevel(str, enum.Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"


# ── Catalog ──────────────────────────────────────────────────────────────────


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    category: ProductCategory
    skin_types: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    price: Optional[int] = Field(default=None, ge=0, description="Minor currency unit (cents)")
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    is_home_remedy: bool = False
    instructions: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)


class Product(ProductCreate):
    id: str


class ProductFilter(CamelModel):
    """Catalog query. None means "no constraint"; present fields are ANDed."""

    skin_types: Optional[list[str]] = None
    concerns: Optional[list[str]] = None
    category: Optional[str] = None
    is_home_remedy: Optional[bool] = None

    def matches(self, product: Product) -> bool:
        if self.skin_types is not None and not set(self.skin_types) & set(product.skin_types):
            return False
        if self.concerns is not None and not set(self.concerns) & set(product.concerns):
            return False
        if self.category is not None and product.category.value != self.category:
            return False
        if self.is_home_remedy is not None and product.is_home_remedy != self.is_home_remedy:
            return False
        return True


class IngredientCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    benefits: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    safety_level: SafetyLevel
    common_allergens: list[str] = Field(default_factory=list)


class Ingredient(IngredientCreate):
    id: str


class IngredientSafety(CamelModel):
    """Display-time annotation: why an ingredient shows the tier it does."""

    name: str
    description: Optional[str] = None
    safety_level: SafetyLevel = Field(description="Intrinsic catalog tier")
    display_safety: SafetyLevel = Field(description="Tier after applying the user's allergies")
    allergy_match: bool = False
    matched_allergies: list[str] = Field(default_factory=list)
    reason: Optional[str] = None


# ── Assessment ───────────────────────────────────────────────────────────────

LifestyleValue = Union[bool, int, float, str]


class AssessmentCreate(CamelModel):
    """Questionnaire answers. Immutable once stored."""

    skin_type: SkinType
    concerns: list[str] = Field(min_length=1)
    age_range: str = Field(min_length=1)
    budget: str = Field(min_length=1)
    time_available: TimeAvailable
    lifestyle: Dict[str, LifestyleValue] = Field(default_factory=dict)

    @field_validator("concerns")
    @classmethod
    def _dedupe_concerns(cls, v: list[str]) -> list[str]:
        v = _unique([c.strip() for c in v])
        if not v:
            raise ValueError("Please select at least one skin concern")
        return v


class Assessment(AssessmentCreate):
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str


class AssessmentRequest(AssessmentCreate):
    owner_id: str = Field(validation_alias=AliasChoices("ownerId", "userId", "owner_id", "user_id"))


class SkinProfile(CamelModel):
    """Loose profile accepted by routine generation; the composer validates it."""

    skin_type: Optional[str] = None
    concerns: list[str] = Field(default_factory=list)
    age_range: Optional[str] = None
    budget: Optional[str] = None
    time_available: Optional[str] = None
    lifestyle: Dict[str, LifestyleValue] = Field(default_factory=dict)


# ── Routine ──────────────────────────────────────────────────────────────────


class StepProduct(CamelModel):
    id: str
    name: str
    type: ProductType
    instructions: Optional[str] = None


class RoutineStep(CamelModel):
    step_number: int = Field(ge=1)
    title: str
    description: str
    products: list[StepProduct] = Field(default_factory=list)
    frequency: Optional[str] = None


class Adjustment(CamelModel):
    step_title: str
    modification: str
    reason: str


class SeasonalAdjustment(CamelModel):
    season: Season
    adjustments: list[Adjustment] = Field(default_factory=list)


class GenerateRoutineRequest(CamelModel):
    assessment: SkinProfile
    preference_type: PreferenceType = PreferenceType.PRODUCTS
    season: Optional[Season] = None


class GeneratedRoutine(CamelModel):
    morning_steps: list[RoutineStep]
    evening_steps: list[RoutineStep]
    seasonal_adjustments: SeasonalAdjustment


class RoutineCreate(CamelModel):
    name: str = Field(min_length=1)
    season: Season
    preference_type: PreferenceType
    morning_steps: list[RoutineStep] = Field(default_factory=list)
    evening_steps: list[RoutineStep] = Field(default_factory=list)
    is_active: bool = True


class Routine(RoutineCreate):
    id: str
    user_id: str
    assessment_id: str


class RoutineRequest(RoutineCreate):
    owner_id: str = Field(validation_alias=AliasChoices("ownerId", "userId", "owner_id", "user_id"))
    assessment_id: str = Field(min_length=1)


class RoutineActiveUpdate(CamelModel):
    is_active: bool


# ── Users ────────────────────────────────────────────────────────────────────


# bcrypt rejects passwords longer than this
BCRYPT_MAX_BYTES = 72


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=1)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return v


class User(CamelModel):
    """Stored user record. `password_hash` never leaves the service layer."""

    id: str
    username: str
    email: str
    password_hash: str
    allergies: list[str] = Field(default_factory=list)

    def public(self) -> "UserPublic":
        return UserPublic(id=self.id, username=self.username, email=self.email, allergies=list(self.allergies))


class UserPublic(CamelModel):
    id: str
    username: str
    email: str
    allergies: list[str] = Field(default_factory=list)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AllergyUpdate(CamelModel):
    allergies: list[str] = Field(default_factory=list)

    @field_validator("allergies")
    @classmethod
    def _clean(cls, v: list[str]) -> list[str]:
        return _unique([a.strip() for a in v])
