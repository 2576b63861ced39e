"""Startup selection of the storage backend."""

import logging

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from lpg_connect.config import Settings, settings
from lpg_connect.errors import BackendUnavailableError, StorageError
from lpg_connect.stores.base import ApplicationStore
from lpg_connect.stores.memory import InMemoryApplicationStore
from lpg_connect.stores.sql import SqlApplicationStore

logger = logging.getLogger(__name__)


def _volatile_store(config: Settings) -> InMemoryApplicationStore:
    return InMemoryApplicationStore(
        id_start=config.VOLATILE_ID_START, seed=config.SEED_DEFAULT_DATA
    )


def create_store(config: Settings = settings) -> ApplicationStore:
    """Build the store the application will use for its whole lifetime.

    With ``STORAGE_BACKEND="auto"`` the database is tried first and any
    initialization failure (missing driver, refused connection, schema error)
    degrades to the in-memory store. The degradation is only logged.

    Args:
        config: Settings to read the backend choice and database URL from.

    Returns:
        An initialized store.

    Raises:
        BackendUnavailableError: If ``STORAGE_BACKEND="durable"`` and the
            database cannot be initialized.
    """
    if config.STORAGE_BACKEND == "volatile":
        store = _volatile_store(config)
        logger.info("Using %s storage (configured)", store.kind)
        return store

    try:
        store = SqlApplicationStore.from_url(config.DATABASE_URL)
        store.initialize(seed=config.SEED_DEFAULT_DATA)
    except (SQLAlchemyError, StorageError, ImportError, OSError) as e:
        if config.STORAGE_BACKEND == "durable":
            raise BackendUnavailableError(
                f"Database storage is unavailable: {e}"
            ) from e
        fallback = _volatile_store(config)
        logger.warning(
            "Database not available, falling back to in-memory storage "
            "(%s backend, data will not persist): %s",
            fallback.kind,
            e,
        )
        return fallback

    logger.info("Using %s storage at %s", store.kind, store.engine.url)
    return store


def get_store(request: Request) -> ApplicationStore:
    """Dependency that provides the store created at startup."""
    return request.app.state.store
