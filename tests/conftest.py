import pytest

from skinroutine.repositories.memory import MemoryStorage
from skinroutine.services.catalog import CatalogService


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def catalog(storage):
    return CatalogService(storage)

