import os
import socket
import logging

logger = logging.getLogger("pyclack")

DEFAULT_PORT = 12013


def get_log_port():
    return int(os.environ.get("PYCLACK_LOG_PORT", DEFAULT_PORT))


class UDPHandler(logging.Handler):
    """Send log records over UDP, so they don't end up between the prompts."""

    def __init__(self, port=None):
        super().__init__()
        self.udp_address = ("127.0.0.1", port or get_log_port())
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        try:
            bb = self.format(record).encode()
            size = 2**10
            while bb:
                bb1 = bb[:size]
                bb = bb[size:]
                self._socket.sendto(bb1, self.udp_address)
        except Exception:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


def enable_log_forwarding(port=None, level=logging.DEBUG):
    """Forward the pyclack logs to ``pyclack --listen`` in another terminal."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler(port)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def listen_to_logs(port=None):
    """Called from ``pyclack --listen``

    This way we can see the logs from another process, so they do not get
    mixed up with the prompts that are drawn in the terminal.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", port or get_log_port()))

    print(f"Listening for pyclack logs on port {sock.getsockname()[1]}")
    try:
        while True:
            data, addr = sock.recvfrom(2**20)
            print(data.decode(errors="replace"))
    finally:
        sock.close()


if os.environ.get("PYCLACK_LOG"):
    enable_log_forwarding()
