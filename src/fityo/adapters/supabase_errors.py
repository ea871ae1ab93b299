"""Translation of Supabase client errors into storage failures."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from fityo.domain.errors import StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Log backend errors and re-raise them as StorageFailure."""
    try:
        yield
    except APIError as exc:
        logger.exception("Supabase request failed: %s", action)
        raise StorageFailure(exc.message or f"Failed to {action}") from exc
    except httpx.HTTPError as exc:
        logger.exception("Supabase unreachable: %s", action)
        raise StorageFailure(f"Failed to {action}") from exc
