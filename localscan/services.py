import socket

from .models import UNKNOWN


def service_name(port: int, proto: str = "tcp") -> str:
    """Look up the conventional service name for a port in the services database."""
    try:
        return socket.getservbyport(port, proto)
    except (OSError, OverflowError):
        return UNKNOWN
