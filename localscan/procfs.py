"""
Read-only access to the Linux /proc process table.

Every reader takes the pid and the proc root; any OSError coming from a
process that exited or is not ours to inspect is re-raised as
ProcessUnavailable so callers can skip that process and move on.
"""
from __future__ import annotations

import os
import re
from typing import Iterator, List, Optional, Set, Tuple

from .models import SocketTableEntry

PROC_ROOT = "/proc"

# /proc/<pid>/net/<table>; tcp6 may be absent when IPv6 is disabled
NET_TABLES = ("tcp", "tcp6")
MAX_NAME_BYTES = 255

_SOCKET_LINK = re.compile(r"^socket:\[(\d+)\]$")


class ProcessUnavailable(OSError):
    pass


def _proc_path(proc_root: str, pid: int, *parts: str) -> str:
    return os.path.join(proc_root, str(pid), *parts)


def _read_text(path: str, pid: int) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise ProcessUnavailable(f"pid {pid}: cannot read {path}: {e.strerror or e}") from e


def _clean_name(s: str) -> str:
    s = "".join(c for c in s if c.isprintable()).strip()
    return s.encode("utf-8")[:MAX_NAME_BYTES].decode("utf-8", errors="ignore")


def iter_pids(proc_root: str = PROC_ROOT) -> List[int]:
    """Live process ids, ascending. Raises ProcessUnavailable if the proc root cannot be listed."""
    try:
        names = os.listdir(proc_root)
    except OSError as e:
        raise ProcessUnavailable(f"cannot list {proc_root}: {e.strerror or e}") from e
    return sorted(int(n) for n in names if n.isdigit())


def socket_inodes(pid: int, proc_root: str = PROC_ROOT) -> Set[str]:
    fd_dir = _proc_path(proc_root, pid, "fd")
    try:
        fds = os.listdir(fd_dir)
    except OSError as e:
        raise ProcessUnavailable(f"pid {pid}: cannot list {fd_dir}: {e.strerror or e}") from e

    inodes: Set[str] = set()
    for fd in fds:
        try:
            target = os.readlink(os.path.join(fd_dir, fd))
        except OSError:
            # descriptor closed after the listing
            continue
        m = _SOCKET_LINK.match(target)
        if m:
            inodes.add(m.group(1))
    return inodes


def parse_local_port(field: str) -> Optional[int]:
    """
    Local address field is "<hex addr>:<hex port>", e.g. "0100007F:1F90" -> 8080.
    """
    _, sep, port_hex = field.rpartition(":")
    if not sep:
        return None
    try:
        return int(port_hex, 16)
    except ValueError:
        return None


def parse_net_table(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yields (local_port, inode) for each row of a /proc net/tcp style table.
    Header and malformed rows are skipped.
    """
    for line in text.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 10:
            continue
        port = parse_local_port(parts[1])
        if port is None:
            continue
        yield port, parts[9]


def read_socket_table(pid: int, proc_root: str = PROC_ROOT) -> Iterator[SocketTableEntry]:
    """
    Sockets owned by pid: rows of its namespace's tcp tables whose inode
    is held open by one of its descriptors, yielded in table order.
    tcp6 is only read once tcp is exhausted, so a caller that stops at
    the first match never touches the rest.
    """
    inodes = socket_inodes(pid, proc_root)
    if not inodes:
        return

    for table in NET_TABLES:
        path = _proc_path(proc_root, pid, "net", table)
        try:
            text = _read_text(path, pid)
        except ProcessUnavailable:
            if table == "tcp":
                raise
            continue
        for port, inode in parse_net_table(text):
            if inode in inodes:
                yield SocketTableEntry(local_port=port, owning_pid=pid)


def read_display_name(pid: int, proc_root: str = PROC_ROOT) -> str:
    raw = _read_text(_proc_path(proc_root, pid, "comm"), pid)
    return _clean_name(raw.rstrip("\r\n"))


def read_real_uid(pid: int, proc_root: str = PROC_ROOT) -> Optional[int]:
    """
    Real uid is the first of the four ids on the "Uid:" line of /proc/<pid>/status.
    Returns None if the line is missing or malformed.
    """
    text = _read_text(_proc_path(proc_root, pid, "status"), pid)
    for line in text.splitlines():
        if line.startswith("Uid:"):
            fields = line.split()
            if len(fields) < 2:
                return None
            try:
                return int(fields[1])
            except ValueError:
                return None
    return None
