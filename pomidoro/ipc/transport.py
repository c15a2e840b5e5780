"""Connectionless local transport over Unix datagram sockets."""

import logging
import socket
from pathlib import Path

from pomidoro.ipc.protocol import MAX_DATAGRAM_SIZE

logger = logging.getLogger(__name__)


class DatagramEndpoint:
    """A Unix datagram socket bound to a filesystem path.

    Each bind occupies its path exclusively. Closing the endpoint releases
    the socket but leaves the path on disk; removing it is the caller's
    responsibility (see `unlink`).
    """

    def __init__(self, sock: socket.socket, path: Path):
        self._sock = sock
        self.path = path

    @classmethod
    def bind(cls, path: Path | str) -> "DatagramEndpoint":
        """Bind a new endpoint at `path`.

        Raises:
            OSError: If the path is taken or cannot be created.
        """
        path = Path(path)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            sock.bind(str(path))
        except OSError:
            sock.close()
            raise
        logger.debug(f"Bound datagram endpoint at {path}")
        return cls(sock, path)

    def settimeout(self, timeout: float | None) -> None:
        """Set a receive timeout in seconds; None blocks indefinitely."""
        self._sock.settimeout(timeout)

    def send_to(self, data: bytes, address: str | Path) -> None:
        """Send one datagram to `address`.

        Raises:
            OSError: If nothing is bound at `address` or the send fails.
        """
        self._sock.sendto(data, str(address))

    def recv_from(self) -> tuple[bytes, str | None]:
        """Block until one datagram arrives.

        Returns:
            Tuple of (payload, sender address). The address is None when
            the sender is an unbound socket that cannot be replied to.
        """
        data, address = self._sock.recvfrom(MAX_DATAGRAM_SIZE)
        return data, address or None

    def recv(self) -> bytes:
        """Block until one datagram arrives and return its payload."""
        return self._sock.recv(MAX_DATAGRAM_SIZE)

    def close(self) -> None:
        """Close the socket. The bound path stays on disk."""
        self._sock.close()

    def unlink(self) -> None:
        """Remove the bound path if it still exists."""
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> "DatagramEndpoint":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
