"""Translation of SQLAlchemy failures into domain errors.

Repositories wrap every store call in `translate_store_errors` so that no
raw SQLAlchemy exception leaves the persistence layer.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from rolebridge.core.logging import get_logger
from rolebridge.domain.exceptions import (
    DuplicateKey,
    FieldViolation,
    StoreUnavailable,
    ValidationFailed,
)

logger = get_logger(__name__)

_UNIQUE_MARKERS = ("unique", "duplicate")


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from a uniqueness constraint.

    SQLite reports 'UNIQUE constraint failed: users.email', PostgreSQL
    'duplicate key value violates unique constraint'.
    """
    message = str(error.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


@asynccontextmanager
async def translate_store_errors(
    session: AsyncSession,
    unique_field: str,
    value: object = None,
) -> AsyncGenerator[None, None]:
    """Run store calls, mapping constraint and connection failures.

    Args:
        session: Session to roll back when a write fails.
        unique_field: Wire name of the entity's unique natural key.
        value: Value written to the unique field, for diagnostics.

    Raises:
        DuplicateKey: On a uniqueness constraint violation.
        ValidationFailed: On any other integrity violation.
        StoreUnavailable: On connection-level failures.
    """
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        if is_unique_violation(e):
            logger.info("Unique constraint violated", field=unique_field)
            raise DuplicateKey(unique_field, value) from e
        logger.warning("Integrity constraint violated", error=str(e.orig))
        raise ValidationFailed(
            [FieldViolation(field="record", message=str(e.orig), code="integrity_error")]
        ) from e
    except (OperationalError, InterfaceError, DisconnectionError) as e:
        logger.error("Store unavailable", error=str(e), exc_type=type(e).__name__)
        try:
            await session.rollback()
        except (OperationalError, InterfaceError, DisconnectionError):
            logger.debug("Rollback after store failure also failed")
        raise StoreUnavailable(e) from e
