# ruff: noqa: T201

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from claimrecon.app import reconcile_claims
from claimrecon.config import ConfigurationError, configure_logging, get_reconciliation_config
from claimrecon.domain.reconciliation import LABEL_TABLES, ProbeErrorPolicy, render_verdict

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from claimrecon.domain.reconciliation import Verdict

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile expired claim action deadlines against support cases",
    )
    parser.add_argument(
        "claim_ids",
        nargs="*",
        metavar="CLAIM_ID",
        help="Claim identifiers to reconcile, in order",
    )
    parser.add_argument(
        "--ids-file",
        type=Path,
        help="File with one claim identifier per line ('#' starts a comment)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of claims reconciled in parallel (defaults to config)",
    )
    parser.add_argument(
        "--on-probe-error",
        choices=[policy.value for policy in ProbeErrorPolicy],
        default=None,
        help="Behaviour when the generation probe fails (defaults to config)",
    )
    parser.add_argument(
        "--labels",
        choices=sorted(LABEL_TABLES),
        default="en",
        help="Verdict label language (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every check but never call a remediation endpoint",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every state transition and HTTP request",
    )
    return parser.parse_args(list(argv))


def _parse_claim_id(value: str) -> int:
    try:
        claim_id = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid claim id: {value!r}") from exc
    if claim_id <= 0:
        raise ValueError(f"Claim id must be positive: {value!r}")
    return claim_id


def _read_ids_file(path: Path) -> list[str]:
    try:
        text = path.read_text()
    except OSError as exc:
        raise ValueError(f"Cannot read ids file {path}: {exc.strerror}") from exc
    values: list[str] = []
    for line in text.splitlines():
        content = line.split("#", 1)[0].strip()
        if content:
            values.append(content)
    return values


def _collect_claim_ids(args: argparse.Namespace) -> list[int]:
    raw: list[str] = list(args.claim_ids)
    if args.ids_file is not None:
        raw.extend(_read_ids_file(args.ids_file))
    if not raw:
        raise ValueError("No claim ids given (pass them as arguments or via --ids-file)")
    return [_parse_claim_id(value) for value in raw]


def _print_verdict_lines(labels_key: str) -> Callable[[Verdict], None]:
    labels = LABEL_TABLES[labels_key]

    def emit(verdict: Verdict) -> None:
        print(render_verdict(verdict, labels), flush=True)

    return emit


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        claim_ids = _collect_claim_ids(parsed_args)
        settings = get_reconciliation_config()
        overrides: dict[str, object] = {"dry_run": parsed_args.dry_run}
        if parsed_args.concurrency is not None:
            if parsed_args.concurrency < 1:
                raise ValueError("--concurrency must be at least 1")  # noqa: TRY301
            overrides["concurrency"] = parsed_args.concurrency
        if parsed_args.on_probe_error is not None:
            overrides["on_probe_error"] = ProbeErrorPolicy(parsed_args.on_probe_error)
        settings = dataclasses.replace(settings, **overrides)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        reconcile_claims(
            claim_ids,
            settings=settings,
            on_verdict=_print_verdict_lines(parsed_args.labels),
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
