"""JSON-RPC 2.0 message parsing and formatting.

Parses request lines read from the transport and builds the response and
error envelopes written back to it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Maximum message size (1 MB)
MAX_MESSAGE_SIZE = 1_048_576

JSONRPC_VERSION = "2.0"


class JsonRpcError(Exception):
    """JSON-RPC error with code and message."""

    def __init__(
        self,
        code: int,
        message: str,
        data: Any | None = None,
        msg_id: Any | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: JSON-RPC error code.
            message: Human-readable error message.
            data: Optional additional error data.
            msg_id: Request ID, when it could be read before the failure.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data
        self.msg_id = msg_id

    def to_dict(self) -> dict[str, Any]:
        """The ``error`` member of a response; ``data`` only when set."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


@dataclass
class JsonRpcRequest:
    """Represents a JSON-RPC request (has an id member, possibly null)."""

    id: Any
    method: str
    params: Any = None


@dataclass
class JsonRpcNotification:
    """Represents a JSON-RPC notification (no id member)."""

    method: str
    params: Any = None


def _is_valid_id(value: Any) -> bool:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, int | float | str)


def parse_message(raw: str) -> JsonRpcRequest | JsonRpcNotification:
    """Parse a JSON-RPC message from a string.

    Args:
        raw: Raw JSON string.

    Returns:
        Parsed request or notification.

    Raises:
        JsonRpcError: If the message is invalid.
    """
    if len(raw) > MAX_MESSAGE_SIZE:
        raise JsonRpcError(
            PARSE_ERROR,
            "Parse error",
            {"detail": f"Message too large: {len(raw)} bytes exceeds {MAX_MESSAGE_SIZE} limit"},
        )

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise JsonRpcError(PARSE_ERROR, "Parse error") from e

    if not isinstance(data, dict):
        raise JsonRpcError(INVALID_REQUEST, "Invalid Request: message must be an object")

    msg_id = data.get("id")
    if not _is_valid_id(msg_id):
        raise JsonRpcError(
            INVALID_REQUEST, "Invalid Request: id must be a string, number or null"
        )

    # The version member is optional on input, but must be right when present
    if "jsonrpc" in data and data["jsonrpc"] != JSONRPC_VERSION:
        raise JsonRpcError(
            INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'", msg_id=msg_id
        )

    method = data.get("method")
    if not isinstance(method, str):
        raise JsonRpcError(
            INVALID_REQUEST, "Invalid Request: method must be a string", msg_id=msg_id
        )

    # params shape is checked by each method, which knows what it accepts
    params = data.get("params")

    if "id" in data:
        return JsonRpcRequest(id=msg_id, method=method, params=params)
    return JsonRpcNotification(method=method, params=params)


def _dump(envelope: dict[str, Any]) -> str:
    """Serialize an envelope to a single compact line."""
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def format_response(msg_id: Any, result: Any) -> str:
    """Format a successful JSON-RPC response.

    Args:
        msg_id: Request ID to echo back.
        result: Result payload.

    Returns:
        JSON string.
    """
    return _dump({"jsonrpc": JSONRPC_VERSION, "id": msg_id, "result": result})


def format_exception(msg_id: Any, error: JsonRpcError) -> str:
    """Format a JsonRpcError as an error response.

    Args:
        msg_id: Request ID, None when it could not be read.
        error: The error to report.
    """
    return _dump({"jsonrpc": JSONRPC_VERSION, "id": msg_id, "error": error.to_dict()})


def format_error(msg_id: Any, code: int, message: str, data: Any | None = None) -> str:
    """Format an error response from its parts."""
    return format_exception(msg_id, JsonRpcError(code, message, data))
