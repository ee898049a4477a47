# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""healthprobe CLI: run one probe described by a handler JSON document."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError
from ..log import setup_logging
from ..models.handler import handler_from_mapping
from ..models.result import ProbeOutcome, Result
from ..models.workload import Container, Workload
from ..runtime import Prober

logger = logging.getLogger(__name__)

EXIT_CODES = {
    Result.SUCCESS: 0,
    Result.WARNING: 0,
    Result.FAILURE: 1,
    Result.UNKNOWN: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a single exec, HTTP or TCP health probe")
    parser.add_argument("handler", help="Path to a handler JSON document ('-' reads stdin)")
    parser.add_argument("--pod", help="Path to a pod JSON document used to resolve named ports and the default host")
    parser.add_argument("--container", default="", help="Container whose ports are searched for named ports")
    parser.add_argument("--pod-ip", default="", help="Default host when no pod document is given")
    parser.add_argument("--timeout", type=float, default=None, help="Probe timeout in seconds")
    parser.add_argument(
        "--follow-non-local-redirects",
        action="store_true",
        help="Follow HTTP redirects to other hosts instead of reporting a warning",
    )
    parser.add_argument("--verify-ssl", action="store_true", help="Verify TLS certificates of HTTPS targets")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a one-line summary")
    parser.add_argument("--log-level", default=None, help="Logging level (default from HEALTHPROBE_LOG_LEVEL)")
    return parser


def _load_json(path: str) -> Any:
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"cannot read {path}: {exc}") from exc


def _workload_from_args(args: argparse.Namespace) -> Workload:
    if args.pod:
        return Workload.from_mapping(_load_json(args.pod))
    return Workload(containers=(Container(name=args.container),), pod_ip=args.pod_ip)


def _print_outcome(outcome: ProbeOutcome, *, as_json: bool) -> None:
    if as_json:
        json.dump(outcome.to_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
        return
    line = f"[healthprobe] {outcome.result.value}"
    if outcome.error is not None:
        line += f": {outcome.error}"
    elif outcome.output:
        line += f": {outcome.output.strip()}"
    print(line)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ProbeSettings = load_probe_settings()
    if args.follow_non_local_redirects:
        settings = replace(settings, follow_non_local_redirects=True)
    if args.verify_ssl:
        settings = replace(settings, verify_ssl=True)

    try:
        handler = handler_from_mapping(_load_json(args.handler))
        workload = _workload_from_args(args)
    except ConfigurationError as exc:
        logger.warning("Invalid probe input: %s", exc)
        outcome = ProbeOutcome(Result.UNKNOWN, "", exc)
    else:
        with Prober(settings) as prober:
            outcome = prober.run_probe(handler, workload, args.container, args.timeout)

    _print_outcome(outcome, as_json=args.json)
    return EXIT_CODES[outcome.result]


if __name__ == "__main__":
    raise SystemExit(main())
