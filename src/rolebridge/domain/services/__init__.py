"""Domain services for RoleBridge.

Services contain business logic that doesn't naturally fit within a single
entity. The seed service is imported from its module directly because it
works on repositories.
"""

from rolebridge.domain.services.field_validator import (
    EntityKind,
    FieldSpec,
    FieldType,
    FieldValidator,
)
from rolebridge.domain.services.object_id_generator import (
    ObjectIdGenerator,
    generate_object_id,
)
from rolebridge.domain.services.reference_resolver import ReferenceResolver

__all__ = [
    "EntityKind",
    "FieldSpec",
    "FieldType",
    "FieldValidator",
    "ObjectIdGenerator",
    "ReferenceResolver",
    "generate_object_id",
]
