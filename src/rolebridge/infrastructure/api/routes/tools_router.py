"""Tool-call API routes.

Exposes the mediation gateway over HTTP. A failed tool call still answers
200; the envelope's isError flag carries the outcome.
"""

from typing import Any

from fastapi import APIRouter, Body, status

from rolebridge.application.services import TOOLS
from rolebridge.domain.exceptions import UnknownTool
from rolebridge.infrastructure.api.dependencies import GatewayDep
from rolebridge.infrastructure.api.schemas import ErrorResponse, ToolListResponse

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=ToolListResponse)
async def list_tools(gateway: GatewayDep) -> ToolListResponse:
    """List the available tools and their argument schemas."""
    return ToolListResponse(tools=gateway.list_tools())


@router.post(
    "/{name}",
    status_code=status.HTTP_200_OK,
    responses={404: {"model": ErrorResponse, "description": "Unknown tool"}},
)
async def call_tool(
    name: str,
    gateway: GatewayDep,
    arguments: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any]:
    """Call a tool with a JSON object of camelCase arguments."""
    if name not in TOOLS:
        raise UnknownTool(name)
    response = await gateway.call_tool(name, arguments or {})
    return response.model_dump(mode="json", by_alias=True)
