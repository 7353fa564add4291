from __future__ import annotations

import logging
import pwd
from typing import Callable, Optional

from .models import UNKNOWN, ProcessRecord
from .procfs import (
    PROC_ROOT,
    ProcessUnavailable,
    iter_pids,
    read_display_name,
    read_real_uid,
    read_socket_table,
)

log = logging.getLogger(__name__)


def owner_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return UNKNOWN


class Correlator:
    """
    Maps a local TCP port to the process holding a socket bound to it.

    self_pid is the scanner's own pid; it is fixed at construction and that
    process is never reported, so the probe connections do not show up as
    their own owner.
    """

    def __init__(
        self,
        self_pid: int,
        proc_root: str = PROC_ROOT,
        user_lookup: Callable[[int], str] = owner_name,
    ):
        self.self_pid = self_pid
        self.proc_root = proc_root
        self.user_lookup = user_lookup

    def _owner(self, uid: Optional[int]) -> str:
        if uid is None:
            return UNKNOWN
        try:
            return self.user_lookup(uid) or UNKNOWN
        except (KeyError, OSError):
            return UNKNOWN

    def _describe(self, pid: int) -> ProcessRecord:
        name = read_display_name(pid, self.proc_root)
        uid = read_real_uid(pid, self.proc_root)
        return ProcessRecord(pid=pid, name=name, owner=self._owner(uid))

    def _owns_port(self, pid: int, port: int) -> bool:
        return any(e.local_port == port for e in read_socket_table(pid, self.proc_root))

    def correlate(self, port: int) -> Optional[ProcessRecord]:
        """
        First process (ascending pid) with a socket on port wins.
        Processes that vanish or deny access mid-scan are skipped.
        """
        try:
            pids = iter_pids(self.proc_root)
        except ProcessUnavailable as e:
            log.debug("process table unavailable: %s", e)
            return None

        for pid in pids:
            if pid == self.self_pid:
                continue
            try:
                if not self._owns_port(pid, port):
                    continue
                return self._describe(pid)
            except ProcessUnavailable as e:
                log.debug("skipping %s", e)
                continue
        return None
