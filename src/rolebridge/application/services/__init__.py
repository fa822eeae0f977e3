"""Application services."""

from rolebridge.application.services.mediation_gateway import (
    TOOLS,
    MediationGateway,
    ToolDefinition,
)

__all__ = ["MediationGateway", "TOOLS", "ToolDefinition"]
