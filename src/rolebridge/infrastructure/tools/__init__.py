"""Line-delimited JSON-RPC transport for the tool gateway."""

from rolebridge.infrastructure.tools.stdio_server import StdioToolServer

__all__ = ["StdioToolServer"]
