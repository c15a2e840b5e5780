"""Local interprocess channel: transport, codec, server loop and client."""

from pomidoro.ipc.client import RequestRejectedError, client_socket_path, send_and_receive
from pomidoro.ipc.protocol import (
    MAX_DATAGRAM_SIZE,
    ConfirmationResponse,
    ProtocolError,
    Request,
    Response,
    StateResponse,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)
from pomidoro.ipc.server import RequestHandler, ServerAction, serve, start_server
from pomidoro.ipc.transport import DatagramEndpoint

__all__ = [
    "ConfirmationResponse",
    "DatagramEndpoint",
    "MAX_DATAGRAM_SIZE",
    "ProtocolError",
    "Request",
    "RequestHandler",
    "RequestRejectedError",
    "Response",
    "ServerAction",
    "StateResponse",
    "client_socket_path",
    "decode_request",
    "decode_response",
    "encode_request",
    "encode_response",
    "send_and_receive",
    "serve",
    "start_server",
]
