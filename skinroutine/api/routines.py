from typing import List

from fastapi import APIRouter, Depends

from skinroutine.dependencies import Services, get_services
from skinroutine.errors import NotFoundError
from skinroutine.schemas import (
    GeneratedRoutine,
    GenerateRoutineRequest,
    Routine,
    RoutineActiveUpdate,
    RoutineCreate,
    RoutineRequest,
)

router = APIRouter(prefix="/routines", tags=["routines"])


@router.post("/generate", response_model=GeneratedRoutine)
async def generate_routine(body: GenerateRoutineRequest, services: Services = Depends(get_services)):
    season = body.season or services.settings.default_season
    return await services.composer.generate(body.assessment, body.preference_type, season)


@router.post("", response_model=Routine)
async def create_routine(body: RoutineRequest, services: Services = Depends(get_services)):
    payload = RoutineCreate.model_validate(body.model_dump(exclude={"owner_id", "assessment_id"}))
    return await services.routines.create_routine(payload, body.owner_id, body.assessment_id)


@router.get("/user/{user_id}", response_model=List[Routine])
async def list_user_routines(user_id: str, services: Services = Depends(get_services)):
    return await services.routines.list_routines_for_user(user_id)


@router.get("/{routine_id}", response_model=Routine)
async def get_routine(routine_id: str, services: Services = Depends(get_services)):
    routine = await services.routines.get_routine(routine_id)
    if not routine:
        raise NotFoundError("Routine not found")
    return routine


@router.patch("/{routine_id}", response_model=Routine)
async def update_routine(routine_id: str, body: RoutineActiveUpdate, services: Services = Depends(get_services)):
    routine = await services.routines.set_routine_active(routine_id, body.is_active)
    if not routine:
        raise NotFoundError("Routine not found")
    return routine


@router.delete("/{routine_id}")
async def delete_routine(routine_id: str, services: Services = Depends(get_services)):
    if not await services.routines.delete_routine(routine_id):
        raise NotFoundError("Routine not found")
    return {"message": "Routine deleted successfully"}
