"""Client side of the request/response exchange."""

import logging
import random
import string
from pathlib import Path

from pomidoro.ipc.protocol import (
    ConfirmationResponse,
    Request,
    Response,
    decode_response,
    encode_request,
)
from pomidoro.ipc.transport import DatagramEndpoint

logger = logging.getLogger(__name__)


class RequestRejectedError(RuntimeError):
    """Raised when the server answers with an error confirmation."""


def client_socket_path(socket_dir: Path, digits: int = 6) -> Path:
    """Pick an unused client endpoint path inside `socket_dir`."""
    while True:
        suffix = "".join(random.choices(string.digits, k=digits))
        path = socket_dir / f"client{suffix}.sock"
        if not path.exists():
            return path


def send_and_receive(
    client_path: Path | str,
    server_path: Path | str,
    request: Request,
    timeout: float | None = None,
) -> Response:
    """Send one request and wait for its reply.

    Binds a private endpoint at `client_path` for the duration of the
    exchange and removes it afterwards.

    Args:
        client_path: Path for this client's own endpoint.
        server_path: Path the server is bound to.
        request: Request to send.
        timeout: Seconds to wait for the reply; None waits indefinitely.

    Returns:
        The decoded response.

    Raises:
        OSError: If binding, sending or receiving fails (including timeout).
        ProtocolError: If the reply cannot be decoded.
        RequestRejectedError: If the server reports an error.
    """
    endpoint = DatagramEndpoint.bind(client_path)
    try:
        endpoint.settimeout(timeout)
        endpoint.send_to(encode_request(request), server_path)
        logger.debug(f"Sent {request.name} to {server_path}")
        response = decode_response(endpoint.recv())
    finally:
        endpoint.close()
        endpoint.unlink()

    if isinstance(response, ConfirmationResponse) and not response.ok:
        raise RequestRejectedError(response.error)
    return response
