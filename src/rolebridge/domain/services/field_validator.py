"""Field validation for role and user field sets.

Checks presence, type, length and enumeration membership of each field and
returns a normalized copy of the data (trimmed strings, lowercased email,
parsed dates, de-duplicated permissions). The validator has no side effects
and always collects the full list of violations.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable

from rolebridge.domain.entities.role import PERMISSION_VALUES
from rolebridge.domain.exceptions import FieldViolation, ValidationFailed

MIN_PASSWORD_LENGTH = 6


class EntityKind(str, Enum):
    """Entity kinds handled by the mediation layer."""

    ROLE = "role"
    USER = "user"


class FieldType(str, Enum):
    """Supported field types."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    DATE = "date"
    BOOLEAN = "boolean"
    PERMISSIONS = "permissions"
    REFERENCE = "reference"


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of a single entity field.

    Attributes:
        name: Attribute name used by repositories and models.
        wire_name: Name the field has on the tool and REST surfaces.
        type: Field type driving validation and normalization.
        required: Whether the field must be present on create.
        default: Factory for the value applied on create when absent.
    """

    name: str
    wire_name: str
    type: FieldType
    required: bool = False
    default: Callable[[], Any] | None = None


ROLE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("name", "name", FieldType.TEXT, required=True),
    FieldSpec("description", "description", FieldType.TEXT, required=True),
    FieldSpec("permissions", "permissions", FieldType.PERMISSIONS, default=list),
    FieldSpec("is_active", "isActive", FieldType.BOOLEAN, default=lambda: True),
)

USER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("first_name", "firstName", FieldType.TEXT, required=True),
    FieldSpec("last_name", "lastName", FieldType.TEXT, required=True),
    FieldSpec("email", "email", FieldType.EMAIL, required=True),
    FieldSpec("password", "password", FieldType.PASSWORD, required=True),
    FieldSpec("phone", "phone", FieldType.TEXT),
    FieldSpec("date_of_birth", "dateOfBirth", FieldType.DATE),
    FieldSpec("role_id", "role", FieldType.REFERENCE, required=True),
    FieldSpec("is_active", "isActive", FieldType.BOOLEAN, default=lambda: True),
)

ENTITY_FIELDS: dict[EntityKind, tuple[FieldSpec, ...]] = {
    EntityKind.ROLE: ROLE_FIELDS,
    EntityKind.USER: USER_FIELDS,
}

Normalized = tuple[Any, FieldViolation | None]


def _type_error(spec: FieldSpec, expected: str, value: Any) -> FieldViolation:
    return FieldViolation(
        field=spec.wire_name,
        message=f"Expected {expected}, got {type(value).__name__}",
        code="invalid_type",
    )


def _empty_error(spec: FieldSpec) -> FieldViolation:
    return FieldViolation(
        field=spec.wire_name,
        message=f"Required field '{spec.wire_name}' cannot be empty",
        code="required_empty",
    )


class FieldValidator:
    """Validator for role and user field sets."""

    @classmethod
    def normalize_text(cls, value: Any, spec: FieldSpec) -> Normalized:
        """Trim a text value; empty optional text becomes None."""
        if not isinstance(value, str):
            return None, _type_error(spec, "text value", value)
        value = value.strip()
        if not value:
            if spec.required:
                return None, _empty_error(spec)
            return None, None
        return value, None

    @classmethod
    def normalize_email(cls, value: Any, spec: FieldSpec) -> Normalized:
        """Trim and lowercase an email. No syntax check beyond that."""
        value, error = cls.normalize_text(value, spec)
        if error or value is None:
            return value, error
        return value.lower(), None

    @classmethod
    def normalize_password(cls, value: Any, spec: FieldSpec) -> Normalized:
        """Check password length. The plaintext is passed through untrimmed."""
        if not isinstance(value, str):
            return None, _type_error(spec, "text value", value)
        if not value.strip():
            return None, _empty_error(spec)
        if len(value) < MIN_PASSWORD_LENGTH:
            return None, FieldViolation(
                field=spec.wire_name,
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                code="password_too_short",
            )
        return value, None

    @classmethod
    def normalize_date(cls, value: Any, spec: FieldSpec) -> Normalized:
        """Accept a date, a datetime, or an ISO 8601 date/datetime string."""
        if isinstance(value, datetime):
            return value.date(), None
        if isinstance(value, date):
            return value, None
        if not isinstance(value, str):
            return None, _type_error(spec, "date string", value)

        text = value.strip()
        if not text:
            return None, None
        try:
            return date.fromisoformat(text), None
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date(), None
        except ValueError:
            return None, FieldViolation(
                field=spec.wire_name,
                message="Invalid date format. Use YYYY-MM-DD",
                code="invalid_date_format",
            )

    @classmethod
    def normalize_boolean(cls, value: Any, spec: FieldSpec) -> Normalized:
        if not isinstance(value, bool):
            return None, _type_error(spec, "boolean value", value)
        return value, None

    @classmethod
    def normalize_reference(cls, value: Any, spec: FieldSpec) -> Normalized:
        """Reference values are non-empty strings; existence is not checked here."""
        return cls.normalize_text(value, spec)

    @classmethod
    def normalize_permissions(
        cls, value: Any, spec: FieldSpec
    ) -> tuple[Any, list[FieldViolation]]:
        """Validate a permission list, reporting every offending value.

        Duplicates are accepted and collapsed, keeping first-seen order.
        """
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set)):
            return None, [_type_error(spec, "list of permissions", value)]

        errors: list[FieldViolation] = []
        permissions: list[str] = []
        for item in value:
            if not isinstance(item, str):
                errors.append(_type_error(spec, "permission string", item))
            elif item not in PERMISSION_VALUES:
                errors.append(
                    FieldViolation(
                        field=spec.wire_name,
                        message=(
                            f"'{item}' is not a valid permission. "
                            f"Allowed: {', '.join(PERMISSION_VALUES)}"
                        ),
                        code="invalid_permission",
                    )
                )
            elif item not in permissions:
                permissions.append(item)
        return permissions, errors

    @classmethod
    def validate_field_value(
        cls, value: Any, spec: FieldSpec
    ) -> tuple[Any, list[FieldViolation]]:
        """Validate and normalize a single field value against its spec."""
        if spec.type == FieldType.PERMISSIONS:
            return cls.normalize_permissions(value, spec)

        normalizers = {
            FieldType.TEXT: cls.normalize_text,
            FieldType.EMAIL: cls.normalize_email,
            FieldType.PASSWORD: cls.normalize_password,
            FieldType.DATE: cls.normalize_date,
            FieldType.BOOLEAN: cls.normalize_boolean,
            FieldType.REFERENCE: cls.normalize_reference,
        }
        normalized, error = normalizers[spec.type](value, spec)
        return normalized, [error] if error else []

    @classmethod
    def validate(
        cls, kind: EntityKind, data: dict[str, Any], partial: bool = False
    ) -> tuple[dict[str, Any], list[FieldViolation]]:
        """Validate a candidate field set for an entity kind.

        Args:
            kind: Entity kind whose field table applies.
            data: Candidate fields keyed by attribute name.
            partial: If True, only fields present in data are checked and no
                defaults are applied (updates).

        Returns:
            Tuple of (normalized_data, violations). Violations is empty when
            the data is acceptable.
        """
        fields = ENTITY_FIELDS[kind]
        specs = {spec.name: spec for spec in fields}
        errors: list[FieldViolation] = []
        normalized: dict[str, Any] = {}

        for name in data:
            if name not in specs:
                errors.append(
                    FieldViolation(
                        field=name,
                        message=f"Unknown field '{name}' for {kind.value}",
                        code="unknown_field",
                    )
                )

        for spec in fields:
            if spec.name in data:
                value = data[spec.name]
                if value is None:
                    if spec.default is not None and not partial:
                        normalized[spec.name] = spec.default()
                    elif spec.required or spec.default is not None:
                        errors.append(
                            FieldViolation(
                                field=spec.wire_name,
                                message=f"Required field '{spec.wire_name}' cannot be null",
                                code="required_null",
                            )
                        )
                    else:
                        normalized[spec.name] = None
                    continue

                value, field_errors = cls.validate_field_value(value, spec)
                if field_errors:
                    errors.extend(field_errors)
                else:
                    normalized[spec.name] = value
            elif not partial:
                if spec.required:
                    errors.append(
                        FieldViolation(
                            field=spec.wire_name,
                            message=f"Required field '{spec.wire_name}' is missing",
                            code="required_missing",
                        )
                    )
                elif spec.default is not None:
                    normalized[spec.name] = spec.default()

        return normalized, errors

    @classmethod
    def validate_or_raise(
        cls, kind: EntityKind, data: dict[str, Any], partial: bool = False
    ) -> dict[str, Any]:
        """Validate a field set and raise ValidationFailed on any violation."""
        normalized, errors = cls.validate(kind, data, partial=partial)
        if errors:
            raise ValidationFailed(errors)
        return normalized
