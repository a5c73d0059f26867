"""Polaris SDK configuration."""

from .account import (
    ServiceAccount,
    default_service_account,
    service_account_from_env,
    service_account_from_file,
)
from .loader import ConfigLoader, resolve_env_vars
from .models import DEFAULT_SERVICE_ACCOUNT_FILE, LogConfig, RedactionConfig, SDKConfig

__all__ = [
    "DEFAULT_SERVICE_ACCOUNT_FILE",
    "ConfigLoader",
    "LogConfig",
    "RedactionConfig",
    "SDKConfig",
    "ServiceAccount",
    "default_service_account",
    "resolve_env_vars",
    "service_account_from_env",
    "service_account_from_file",
]
