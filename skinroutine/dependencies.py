"""Service container and FastAPI dependency providers."""

from dataclasses import dataclass

from fastapi import Request

from skinroutine.config import Settings
from skinroutine.repositories.base import Storage
from skinroutine.services.assessments import AssessmentService
from skinroutine.services.catalog import CatalogService
from skinroutine.services.routine_composer import RoutineComposer
from skinroutine.services.routines import RoutineService
from skinroutine.services.safety import SafetyClassifier
from skinroutine.services.users import UserService


@dataclass
class Services:
    """Everything a request handler needs, wired to one storage backend."""

    settings: Settings
    storage: Storage
    catalog: CatalogService
    safety: SafetyClassifier
    composer: RoutineComposer
    assessments: AssessmentService
    routines: RoutineService
    users: UserService

    @classmethod
    def build(cls, settings: Settings, storage: Storage) -> "Services":
        catalog = CatalogService(storage)
        return cls(
            settings=settings,
            storage=storage,
            catalog=catalog,
            safety=SafetyClassifier(catalog),
            composer=RoutineComposer(catalog, max_products_per_step=settings.max_products_per_step),
            assessments=AssessmentService(storage),
            routines=RoutineService(storage),
            users=UserService(storage),
        )


def get_services(request: Request) -> Services:
    return request.app.state.services
