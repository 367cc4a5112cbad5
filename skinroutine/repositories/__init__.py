from skinroutine.config import Settings
from skinroutine.repositories.base import Storage
from skinroutine.repositories.memory import MemoryStorage


def create_storage(settings: Settings) -> Storage:
    """Build the storage backend named by `settings.storage_backend`."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sql":
        # Imported lazily so the memory backend never needs a DB driver
        from skinroutine.database import make_engine
        from skinroutine.repositories.sql import SqlStorage

        return SqlStorage(make_engine(settings.database_url, echo=settings.database_echo))
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


__all__ = ["Storage", "MemoryStorage", "create_storage"]
