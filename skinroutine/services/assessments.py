"""Assessment lifecycle: validated, owned, immutable questionnaire snapshots."""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from skinroutine.errors import NotFoundError, ValidationError
from skinroutine.repositories.base import Storage
from skinroutine.schemas import Assessment, AssessmentCreate

logger = logging.getLogger(__name__)


class AssessmentService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def create_assessment(self, data: Union[AssessmentCreate, Dict[str, Any]], owner_id: str) -> Assessment:
        """Validate and store a questionnaire for `owner_id`.

        Raises ValidationError when skinType, concerns, ageRange, budget or
        timeAvailable is missing or empty, NotFoundError for an unknown owner.
        """
        if not isinstance(data, AssessmentCreate):
            try:
                data = AssessmentCreate.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e) from e

        if not owner_id or not await self.storage.get_user(owner_id):
            raise NotFoundError("User not found")

        assessment = await self.storage.create_assessment(data, owner_id)
        logger.info(f"Created assessment {assessment.id} for user {owner_id}")
        return assessment

    async def get_assessment(self, assessment_id: str) -> Optional[Assessment]:
        return await self.storage.get_assessment(assessment_id)

    async def list_assessments_for_user(self, owner_id: str) -> List[Assessment]:
        return await self.storage.list_assessments_for_user(owner_id)
