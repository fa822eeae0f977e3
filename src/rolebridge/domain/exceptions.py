"""Domain errors raised by the mediation layer.

Every failure that can leave a repository or the reference resolver is one of
these classes. The gateway and the REST layer turn them into caller-facing
messages; nothing below them formats strings for end users.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure.

    Attributes:
        field: Wire name of the offending field (e.g. 'firstName').
        message: Human-readable explanation.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class MediationError(Exception):
    """Base class for all errors surfaced by the mediation layer."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(MediationError):
    """Raised when a candidate field set violates entity constraints."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        if not violations:
            raise ValueError("ValidationFailed requires at least one violation")
        self.violations = list(violations)
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in self.violations))

    @property
    def field(self) -> str:
        """Wire name of the first offending field."""
        return self.violations[0].field

    @property
    def reason(self) -> str:
        """Message of the first violation."""
        return self.violations[0].message


class DuplicateKey(MediationError):
    """Raised when a write collides with a unique field of another row."""

    def __init__(self, field: str, value: Any = None) -> None:
        self.field = field
        self.value = value
        label = "Role name" if field == "name" else field.capitalize()
        super().__init__(f"{label} already exists")


class NotFound(MediationError):
    """Raised when no entity of the given kind has the given id."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.id = entity_id
        super().__init__(f"{kind.capitalize()} not found")


class ReferenceNotFound(MediationError):
    """Raised when a role reference cannot be resolved to an identifier."""

    def __init__(self, reference: str) -> None:
        self.input = reference
        super().__init__(f"Failed to resolve role: Role '{reference}' not found")


class ReferenceInUse(MediationError):
    """Raised when deleting an entity that other rows still reference."""

    def __init__(self, kind: str, entity_id: str, count: int) -> None:
        self.kind = kind
        self.id = entity_id
        self.count = count
        super().__init__(
            f"{kind.capitalize()} is still assigned to {count} user(s)"
        )


class StoreUnavailable(MediationError):
    """Raised when the store cannot be reached or the connection drops."""

    def __init__(self, cause: Exception | None = None) -> None:
        self.cause = cause
        message = "Store unavailable"
        if cause is not None:
            message += f": {cause.__class__.__name__}"
        super().__init__(message)


class UnknownTool(MediationError):
    """Raised when the gateway is asked for an operation it does not expose."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")
