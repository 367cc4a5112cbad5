"""Saved routines: create from a generated payload, toggle, delete."""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from skinroutine.errors import NotFoundError, ValidationError
from skinroutine.repositories.base import Storage
from skinroutine.schemas import Routine, RoutineCreate

logger = logging.getLogger(__name__)


class RoutineService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def create_routine(
        self,
        payload: Union[RoutineCreate, Dict[str, Any]],
        owner_id: str,
        assessment_id: str,
    ) -> Routine:
        """Persist a routine. The assessment must exist and belong to the owner."""
        if not isinstance(payload, RoutineCreate):
            try:
                payload = RoutineCreate.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e) from e

        assessment = await self.storage.get_assessment(assessment_id) if assessment_id else None
        if assessment is None or assessment.user_id != owner_id:
            logger.warning(f"Rejected routine for user {owner_id}: assessment {assessment_id} not found")
            raise NotFoundError("Assessment not found")

        routine = await self.storage.create_routine(payload, owner_id, assessment_id)
        logger.info(f"Created routine {routine.id} for user {owner_id}")
        return routine

    async def get_routine(self, routine_id: str) -> Optional[Routine]:
        return await self.storage.get_routine(routine_id)

    async def list_routines_for_user(self, owner_id: str) -> List[Routine]:
        return await self.storage.list_routines_for_user(owner_id)

    async def set_routine_active(self, routine_id: str, active: bool) -> Optional[Routine]:
        """Last write wins; None when the routine doesn't exist."""
        return await self.storage.update_routine_active(routine_id, bool(active))

    async def delete_routine(self, routine_id: str) -> bool:
        deleted = await self.storage.delete_routine(routine_id)
        if deleted:
            logger.info(f"Deleted routine {routine_id}")
        return deleted
