from __future__ import annotations

import logging
import socket
from typing import Optional

from .models import PortObservation, PortState
from .ports import is_valid_port

LOOPBACK_HOST = "127.0.0.1"

log = logging.getLogger(__name__)


def _new_socket(timeout_s: Optional[float]) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    if timeout_s is not None:
        sock.settimeout(timeout_s)
    return sock


def _close(sock: Optional[socket.socket]) -> None:
    if sock:
        try:
            sock.close()
        except OSError:
            pass


def _second_dial(host: str, port: int, timeout_s: Optional[float]) -> PortState:
    """
    Called while the first connection is still held open.
    A listener accepts another peer; a single paired socket does not.
    """
    try:
        sock = _new_socket(timeout_s)
    except OSError:
        return PortState.OPEN

    try:
        sock.connect((host, port))
        return PortState.LISTENING
    except (socket.timeout, ConnectionRefusedError, OSError):
        return PortState.ESTABLISHED
    finally:
        _close(sock)


def probe(
    port: int,
    host: str = LOOPBACK_HOST,
    timeout_s: Optional[float] = None,
) -> PortObservation:
    if not is_valid_port(port):
        raise ValueError(f"Invalid port: {port}")

    try:
        sock = _new_socket(timeout_s)
    except OSError as e:
        log.debug("port %d skipped, cannot create probe socket: %s", port, e)
        return PortObservation(port=port, reachable=False)

    try:
        sock.connect((host, port))
    except (socket.timeout, ConnectionRefusedError, OSError):
        _close(sock)
        return PortObservation(port=port, reachable=False)

    try:
        state = _second_dial(host, port, timeout_s)
    finally:
        _close(sock)

    log.debug("port %d open (%s)", port, state.value)
    return PortObservation(port=port, reachable=True, state=state)
