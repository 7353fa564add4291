from __future__ import annotations

from typing import Iterator

MIN_PORT = 1
MAX_PORT = 65535


def is_valid_port(port: int) -> bool:
    return MIN_PORT <= port <= MAX_PORT


def port_range(start: int = MIN_PORT, end: int = MAX_PORT) -> Iterator[int]:
    """
    Yields every port from start to end inclusive, ascending.
    Bounds outside 1-65535 are rejected rather than clamped.
    """
    if not is_valid_port(start) or not is_valid_port(end) or start > end:
        raise ValueError(f"Invalid port range: {start}-{end}")
    return iter(range(start, end + 1))
