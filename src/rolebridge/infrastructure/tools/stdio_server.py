"""JSON-RPC 2.0 server over stdin/stdout exposing the tool gateway.

Transport: one JSON message per line in each direction. stdout carries
protocol messages only; logs go to stderr. Messages without an "id" are
notifications and never get a reply.
"""

import asyncio
import json
import sys
from typing import IO, Any

from rolebridge import __version__
from rolebridge.application.services import MediationGateway
from rolebridge.core.logging import get_logger

logger = get_logger(__name__)

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcError(Exception):
    """A JSON-RPC error to be sent back to the client."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


def error_response(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


class StdioToolServer:
    """Serves tools/list and tools/call for a MediationGateway."""

    def __init__(
        self,
        gateway: MediationGateway,
        reader: IO[str] | None = None,
        writer: IO[str] | None = None,
        server_name: str = "rolebridge",
    ) -> None:
        """Initialize the server.

        Args:
            gateway: Gateway that executes the tool calls.
            reader: Line source. Defaults to sys.stdin.
            writer: Line sink. Defaults to sys.stdout.
            server_name: Name reported in the initialize handshake.
        """
        self.gateway = gateway
        self.reader = reader or sys.stdin
        self.writer = writer or sys.stdout
        self.server_name = server_name
        self._methods = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def serve(self) -> None:
        """Read and answer messages until the reader is exhausted."""
        logger.info("Tool server running on stdio", server=self.server_name)
        while True:
            line = await asyncio.to_thread(self.reader.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue

            response = await self.handle_line(line)
            if response is not None:
                self._write(response)
        logger.info("Tool server input closed")

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        """Parse one line and return the reply, if any."""
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON received", error=str(e))
            return error_response(None, PARSE_ERROR, "Parse error")
        return await self.handle_message(message)

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Dispatch one decoded message.

        Returns:
            The reply, or None for notifications.
        """
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            request_id = message.get("id") if isinstance(message, dict) else None
            return error_response(request_id, INVALID_REQUEST, "Invalid Request")

        method = message["method"]
        is_notification = "id" not in message
        request_id = message.get("id")
        params = message.get("params")
        if params is None:
            params = {}

        handler = self._methods.get(method)
        if handler is None:
            if is_notification:
                logger.debug("Notification ignored", method=method)
                return None
            logger.info("Unknown method", method=method)
            return error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            if not isinstance(params, dict):
                raise JsonRpcError(INVALID_PARAMS, "params must be an object")
            result = await handler(params)
        except JsonRpcError as e:
            if is_notification:
                return None
            return error_response(request_id, e.code, e.message)
        except Exception as e:
            logger.exception("Request handler failed", method=method, error=str(e))
            if is_notification:
                return None
            return error_response(request_id, INTERNAL_ERROR, "Internal error")

        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _write(self, message: dict[str, Any]) -> None:
        self.writer.write(json.dumps(message) + "\n")
        self.writer.flush()

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.server_name, "version": __version__},
        }

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": self.gateway.list_tools()}

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(params.get("name"), str):
            raise JsonRpcError(INVALID_PARAMS, "tools/call requires a tool name")
        response = await self.gateway.call_tool(params["name"], params.get("arguments") or {})
        return response.to_tool_result()
