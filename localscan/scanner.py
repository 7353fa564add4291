from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Iterator, Optional

from .models import PortObservation, ProcessRecord, ScanRecord
from .ports import port_range
from .prober import probe
from .services import service_name

log = logging.getLogger(__name__)

ProbeFn = Callable[[int], PortObservation]
CorrelateFn = Callable[[int], Optional[ProcessRecord]]
ServiceFn = Callable[[int], str]


def iter_scan(
    correlate: CorrelateFn,
    ports: Optional[Iterable[int]] = None,
    probe_fn: ProbeFn = probe,
    resolve_service: ServiceFn = service_name,
) -> Iterator[ScanRecord]:
    """
    Strictly sequential sweep: one port probed and fully analysed before
    the next is touched. Closed ports produce nothing.
    """
    if ports is None:
        ports = port_range()

    scanned = 0
    open_count = 0
    start_all = time.perf_counter()
    log.info("Starting sweep")

    for port in ports:
        obs = probe_fn(port)
        scanned += 1
        if not obs.reachable:
            continue

        open_count += 1
        yield ScanRecord(
            port=port,
            state=obs.state,
            service=resolve_service(port),
            process=correlate(port),
        )

    elapsed = time.perf_counter() - start_all
    log.info("Scanned %d ports | open=%d | %.1fs", scanned, open_count, elapsed)

