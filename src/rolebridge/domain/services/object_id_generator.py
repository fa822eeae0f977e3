"""Object identifier generator.

Generates 24-character hexadecimal identifiers: a 4-byte big-endian
seconds timestamp followed by 8 random bytes. Identifiers sort roughly by
creation time and are what callers see as an entity's `id`.
"""

import re
import secrets
import time


class ObjectIdGenerator:
    """Generator and validator for 24-hex-character identifiers.

    Example IDs: 65a1f3c2e4b0a1b2c3d4e5f6, 000000010123456789abcdef
    """

    # Exact shape accepted as an identifier; anything else is treated as a name
    PATTERN = re.compile(r"[0-9a-fA-F]{24}")

    @classmethod
    def generate(cls, timestamp: float | None = None) -> str:
        """Generate a new identifier.

        Args:
            timestamp: Seconds since the epoch to embed. Defaults to now.

        Returns:
            A lowercase 24-character hexadecimal string.
        """
        seconds = int(time.time() if timestamp is None else timestamp) & 0xFFFFFFFF
        return f"{seconds:08x}{secrets.token_hex(8)}"

    @classmethod
    def validate(cls, value: object) -> bool:
        """Check whether a value has the identifier shape.

        Examples:
            >>> ObjectIdGenerator.validate("65a1f3c2e4b0a1b2c3d4e5f6")
            True
            >>> ObjectIdGenerator.validate("admin")
            False
        """
        if not isinstance(value, str):
            return False
        return cls.PATTERN.fullmatch(value) is not None


def generate_object_id() -> str:
    """Column default for model primary keys."""
    return ObjectIdGenerator.generate()
