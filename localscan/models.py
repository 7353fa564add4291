from dataclasses import dataclass
from enum import Enum
from typing import Optional

UNKNOWN = "unknown"


class PortState(str, Enum):
    LISTENING = "LISTENING"
    ESTABLISHED = "ESTABLISHED"
    OPEN = "OPEN"


@dataclass(frozen=True)
class PortObservation:
    # state is set only when reachable is true
    port: int
    reachable: bool
    state: Optional[PortState] = None


@dataclass(frozen=True)
class SocketTableEntry:
    local_port: int
    owning_pid: int


@dataclass(frozen=True)
class ProcessRecord:
    pid: int
    name: str
    owner: str


@dataclass(frozen=True)
class ScanRecord:
    port: int
    state: PortState
    service: str
    process: Optional[ProcessRecord] = None
