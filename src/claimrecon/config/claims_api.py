"""Claims and support-case API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, parse_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CALLER_SCOPES = "admin"
DEFAULT_ADMIN_ID = "admin"


@dataclass(frozen=True, slots=True)
class ClaimsApiConfig:
    """Connection settings for the claims system and the case-management system."""

    claims: ResilienceConfig
    cases: ResilienceConfig


def _positive_float(raw: str) -> float:
    value = float(raw)
    if value <= 0:
        raise ValueError("must be positive")
    return value


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def get_claims_api_config() -> ClaimsApiConfig:
    claims_base_url = require_env_vars(("CLAIMRECON_CLAIMS_BASE_URL",))[
        "CLAIMRECON_CLAIMS_BASE_URL"
    ]
    cases_base_url = optional_env_var("CLAIMRECON_CASES_BASE_URL") or claims_base_url
    caller_scopes = optional_env_var("CLAIMRECON_CALLER_SCOPES") or DEFAULT_CALLER_SCOPES
    admin_id = optional_env_var("CLAIMRECON_ADMIN_ID") or DEFAULT_ADMIN_ID

    timeout = parse_env_var("CLAIMRECON_TIMEOUT_SECONDS", _positive_float, DEFAULT_TIMEOUT_SECONDS)
    retries = parse_env_var("CLAIMRECON_HTTP_RETRIES", _non_negative_int, 0)
    calls_per_second = parse_env_var("CLAIMRECON_RATE_LIMIT", _positive_float, None)
    ratelimit = (
        RateLimit(max_calls=1, per_seconds=1.0 / calls_per_second)
        if calls_per_second is not None
        else None
    )

    for url in (claims_base_url, cases_base_url):
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Base URL must be http(s): {url!r}")

    return ClaimsApiConfig(
        claims=ResilienceConfig(
            name="claims",
            base_url=claims_base_url,
            timeout_seconds=timeout,
            retry=RetryPolicy(total=retries),
            ratelimit=ratelimit,
            default_headers={"X-Caller-Scopes": caller_scopes},
        ),
        cases=ResilienceConfig(
            name="cases",
            base_url=cases_base_url,
            timeout_seconds=timeout,
            retry=RetryPolicy(total=retries),
            ratelimit=ratelimit,
            default_headers={"X-Admin-Id": admin_id},
        ),
    )
