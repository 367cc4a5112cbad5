from typing import List

from fastapi import APIRouter, Depends

from skinroutine.dependencies import Services, get_services
from skinroutine.errors import NotFoundError
from skinroutine.schemas import Assessment, AssessmentCreate, AssessmentRequest

router = APIRouter(prefix="/assessments", tags=["assessments"])


@router.post("", response_model=Assessment)
async def create_assessment(body: AssessmentRequest, services: Services = Depends(get_services)):
    data = AssessmentCreate.model_validate(body.model_dump(exclude={"owner_id"}))
    return await services.assessments.create_assessment(data, body.owner_id)


@router.get("/user/{user_id}", response_model=List[Assessment])
async def list_user_assessments(user_id: str, services: Services = Depends(get_services)):
    return await services.assessments.list_assessments_for_user(user_id)


@router.get("/{assessment_id}", response_model=Assessment)
async def get_assessment(assessment_id: str, services: Services = Depends(get_services)):
    assessment = await services.assessments.get_assessment(assessment_id)
    if not assessment:
        raise NotFoundError("Assessment not found")
    return assessment
