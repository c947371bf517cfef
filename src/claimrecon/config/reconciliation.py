"""Reconciliation run settings."""

from __future__ import annotations

from dataclasses import dataclass

from claimrecon.domain.reconciliation import ProbeErrorPolicy

from .env import parse_env_var

DEFAULT_CONCURRENCY = 1


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    concurrency: int = DEFAULT_CONCURRENCY
    on_probe_error: ProbeErrorPolicy = ProbeErrorPolicy.ABORT
    dry_run: bool = False


def _concurrency(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise ValueError("must be at least 1")
    return value


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        concurrency=parse_env_var("CLAIMRECON_CONCURRENCY", _concurrency, DEFAULT_CONCURRENCY),
        on_probe_error=parse_env_var(
            "CLAIMRECON_ON_PROBE_ERROR", ProbeErrorPolicy, ProbeErrorPolicy.ABORT
        ),
    )
