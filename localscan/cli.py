from __future__ import annotations

import argparse
import logging
import os

from .correlator import Correlator
from .output import print_header, print_results
from .ports import MAX_PORT, MIN_PORT
from .prober import LOOPBACK_HOST
from .scanner import iter_scan


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description=f"Scan every TCP port on {LOOPBACK_HOST} and show which process owns it"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if os.geteuid() != 0:
        logging.warning("Not running as root: sockets of other users' processes will show as unknown")

    # Own pid is captured once so probe connections are never reported as their own owner
    correlator = Correlator(self_pid=os.getpid())

    print_header(LOOPBACK_HOST, MIN_PORT, MAX_PORT)
    print_results(iter_scan(correlator.correlate))
    return 0
