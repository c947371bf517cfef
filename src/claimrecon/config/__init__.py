"""Application configuration helpers."""

from __future__ import annotations

from .claims_api import ClaimsApiConfig, get_claims_api_config
from .env import optional_env_var, parse_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconciliation import ReconciliationConfig, get_reconciliation_config

__all__ = [
    "ClaimsApiConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_claims_api_config",
    "get_reconciliation_config",
    "optional_env_var",
    "parse_env_var",
    "require_env_vars",
]
