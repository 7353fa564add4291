from __future__ import annotations

from typing import Iterable, Optional

from .models import UNKNOWN, ProcessRecord, ScanRecord

COL_PORT = 8
COL_STATE = 12
COL_SERVICE = 20
COL_PROC = 30


def format_process(p: Optional[ProcessRecord]) -> str:
    if p is None:
        return UNKNOWN
    return f"{p.name:<15}  PID: {p.pid:<6}  User: {p.owner:<8}"


def format_row(r: ScanRecord) -> str:
    return (
        f"{r.port:<{COL_PORT}} {r.state.value:<{COL_STATE}} "
        f"{r.service:<{COL_SERVICE}} {format_process(r.process)}"
    )


def print_header(host: str, start: int, end: int) -> None:
    print(f"Scanning {host} ports {start} to {end}...\n")
    print("\nPort Scanner Results")
    print(
        f"{'PORT':<{COL_PORT}} {'STATE':<{COL_STATE}} "
        f"{'SERVICE':<{COL_SERVICE}} {'PROCESS':<{COL_PROC}}",
    )
    print(
        f"{'-' * COL_PORT} {'-' * (COL_STATE - 1):<{COL_STATE}} "
        f"{'-' * (COL_SERVICE - 1):<{COL_SERVICE}} {'-' * COL_PROC}",
    )


def print_results(records: Iterable[ScanRecord]) -> int:
    """
    Prints each record as it arrives so a long sweep shows progress.
    Returns the number of rows printed.
    """
    count = 0
    for r in records:
        print(format_row(r), flush=True)
        count += 1
    print(f"\nFound {count} open ports")
    return count
