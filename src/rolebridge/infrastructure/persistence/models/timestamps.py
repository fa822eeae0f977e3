"""Timestamp column type and defaults shared by the models."""

from datetime import datetime, timezone

from sqlalchemy import types


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UtcDateTime(types.TypeDecorator):
    """Timezone-aware UTC datetime on every backend.

    SQLite stores DateTime values without an offset, so values read back are
    naive. They are written in UTC and tagged as UTC again when loaded.
    """

    impl = types.DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
