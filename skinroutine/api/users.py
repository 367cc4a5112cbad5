from typing import List

from fastapi import APIRouter, Depends, HTTPException

from skinroutine.dependencies import Services, get_services
from skinroutine.errors import NotFoundError
from skinroutine.schemas import AllergyUpdate, IngredientSafety, LoginRequest, UserCreate, UserPublic

router = APIRouter(tags=["users"])


@router.post("/auth/register")
async def register(body: UserCreate, services: Services = Depends(get_services)):
    user = await services.users.register(body)
    return {"user": user.public().model_dump(by_alias=True)}


@router.post("/auth/login")
async def login(body: LoginRequest, services: Services = Depends(get_services)):
    user = await services.users.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"user": user.public().model_dump(by_alias=True)}


@router.get("/users/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, services: Services = Depends(get_services)):
    user = await services.users.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user.public()


@router.put("/users/{user_id}/allergies", response_model=UserPublic)
async def update_allergies(user_id: str, body: AllergyUpdate, services: Services = Depends(get_services)):
    user = await services.users.update_allergies(user_id, body.allergies)
    if not user:
        raise NotFoundError("User not found")
    return user.public()


@router.get("/users/{user_id}/ingredient-analysis", response_model=List[IngredientSafety])
async def ingredient_analysis(user_id: str, services: Services = Depends(get_services)):
    """Catalog ingredients annotated with the user's allergy matches."""
    user = await services.users.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return await services.safety.analyze(user.allergies)
