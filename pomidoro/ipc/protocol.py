"""Request/response messages and their datagram encoding.

Each datagram starts with a fixed header followed by a compact JSON body:

    magic (2 bytes, b"PD") | version (1 byte) | kind (1 byte) | body

Requests carry an empty body. Responses carry the fields of the variant.
"""

import json
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from pydantic import ValidationError

from pomidoro.model.state import PomodoroState

MAGIC = b"PD"
PROTOCOL_VERSION = 1
MAX_DATAGRAM_SIZE = 65_535

_HEADER = struct.Struct("!2sBB")


class ProtocolError(ValueError):
    """Raised when a datagram cannot be encoded or decoded."""


class Request(IntEnum):
    """Commands a client can send to the server."""

    FETCH = 1
    TOGGLE = 2
    SKIP = 3
    RESET = 4
    STOP = 5


class ResponseKind(IntEnum):
    """Wire tags of the response variants."""

    STATE = 16
    CONFIRMATION = 17


@dataclass(frozen=True)
class StateResponse:
    """Reply to a fetch request."""

    state: PomodoroState


@dataclass(frozen=True)
class ConfirmationResponse:
    """Reply to a command: success when `error` is None."""

    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


Response = StateResponse | ConfirmationResponse


def _pack(kind: int, body: dict[str, Any] | None = None) -> bytes:
    payload = b""
    if body is not None:
        payload = json.dumps(body, separators=(",", ":"), sort_keys=True).encode("utf-8")
    datagram = _HEADER.pack(MAGIC, PROTOCOL_VERSION, kind) + payload
    if len(datagram) > MAX_DATAGRAM_SIZE:
        raise ProtocolError(
            f"Message of {len(datagram)} bytes exceeds the {MAX_DATAGRAM_SIZE} byte limit"
        )
    return datagram


def _unpack(data: bytes) -> tuple[int, bytes]:
    if len(data) < _HEADER.size:
        raise ProtocolError(f"Message too short: {len(data)} bytes")
    magic, version, kind = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise ProtocolError(f"Bad magic {magic!r}")
    if version != PROTOCOL_VERSION:
        raise ProtocolError(f"Unsupported protocol version {version}")
    return kind, data[_HEADER.size:]


def _load_body(payload: bytes) -> dict[str, Any]:
    try:
        body = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolError(f"Invalid message body: {e}") from e
    if not isinstance(body, dict):
        raise ProtocolError("Message body must be a JSON object")
    return body


def encode_request(request: Request) -> bytes:
    """Encode a request as a datagram."""
    return _pack(request.value)


def decode_request(data: bytes) -> Request:
    """Decode a datagram into a request.

    Raises:
        ProtocolError: If the datagram is malformed or of an unknown kind.
    """
    kind, payload = _unpack(data)
    try:
        request = Request(kind)
    except ValueError:
        raise ProtocolError(f"Unknown request kind {kind}") from None
    if payload:
        raise ProtocolError(f"Unexpected body in {request.name} request")
    return request


def encode_response(response: Response) -> bytes:
    """Encode a response as a datagram.

    Raises:
        ProtocolError: If the encoded response is too large.
    """
    if isinstance(response, StateResponse):
        return _pack(ResponseKind.STATE, response.state.model_dump())
    if isinstance(response, ConfirmationResponse):
        return _pack(ResponseKind.CONFIRMATION, {"error": response.error})
    raise TypeError(f"Not a response: {response!r}")


def decode_response(data: bytes) -> Response:
    """Decode a datagram into a response.

    Raises:
        ProtocolError: If the datagram is malformed or of an unknown kind.
    """
    kind, payload = _unpack(data)
    body = _load_body(payload)

    if kind == ResponseKind.STATE:
        try:
            return StateResponse(state=PomodoroState.model_validate(body))
        except ValidationError as e:
            raise ProtocolError(f"Invalid state response: {e}") from e
    if kind == ResponseKind.CONFIRMATION:
        if "error" not in body:
            raise ProtocolError("Confirmation response is missing 'error'")
        error = body["error"]
        if error is not None and not isinstance(error, str):
            raise ProtocolError("Confirmation error must be a string or null")
        return ConfirmationResponse(error=error)
    raise ProtocolError(f"Unknown response kind {kind}")
