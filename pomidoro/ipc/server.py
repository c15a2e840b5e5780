"""Single-threaded request/response server loop."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from pomidoro.ipc.protocol import (
    ConfirmationResponse,
    ProtocolError,
    Request,
    Response,
    decode_request,
    encode_response,
)
from pomidoro.ipc.transport import DatagramEndpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerAction:
    """Outcome of handling one request.

    Attributes:
        response: Reply to send back to the sender, if any.
        stop: Whether the loop ends after the reply is sent.
    """

    response: Response | None = None
    stop: bool = False

    @classmethod
    def respond(cls, response: Response) -> "ServerAction":
        return cls(response=response)

    @classmethod
    def respond_and_stop(cls, response: Response) -> "ServerAction":
        return cls(response=response, stop=True)

    @classmethod
    def none(cls) -> "ServerAction":
        return cls()


class RequestHandler(ABC):
    """State owned by the server loop and updated by each request."""

    @abstractmethod
    def update(self, request: Request) -> ServerAction:
        """Apply one request and decide how the loop should proceed."""
        ...


def serve(endpoint: DatagramEndpoint, handler: RequestHandler) -> None:
    """Receive and handle requests until the handler asks to stop.

    Requests are processed one at a time in arrival order. A malformed
    request is answered with an error confirmation and does not end the
    loop; neither does a reply that cannot be delivered. A reply too large
    to encode is replaced by an error confirmation. Exceptions raised by
    the handler propagate to the caller.
    """
    logger.info(f"Serving on {endpoint.path}")
    while True:
        data, sender = endpoint.recv_from()

        try:
            request = decode_request(data)
        except ProtocolError as e:
            logger.warning(f"Rejected malformed request from {sender}: {e}")
            _reply(endpoint, sender, ConfirmationResponse(error=str(e)))
            continue

        logger.debug(f"Received {request.name} from {sender}")
        action = handler.update(request)

        if action.response is not None:
            _reply(endpoint, sender, action.response)
        if action.stop:
            logger.info(f"Stop requested, leaving {endpoint.path}")
            return


def _reply(endpoint: DatagramEndpoint, sender: str | None, response: Response) -> None:
    if sender is None:
        logger.warning("Dropping reply to an unbound sender")
        return
    try:
        data = encode_response(response)
    except ProtocolError as e:
        logger.warning(f"Cannot encode reply to {sender}: {e}")
        data = encode_response(ConfirmationResponse(error=str(e)))
    try:
        endpoint.send_to(data, sender)
    except OSError as e:
        logger.warning(f"Failed to reply to {sender}: {e}")


def start_server(path: Path | str, handler: RequestHandler) -> None:
    """Bind `path`, serve until stopped, then close the socket.

    The path itself is left for the caller to remove.

    Raises:
        OSError: If the path cannot be bound.
    """
    with DatagramEndpoint.bind(path) as endpoint:
        serve(endpoint, handler)
