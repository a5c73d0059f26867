"""Polaris SDK configuration data models."""

from dataclasses import dataclass, field

from polaris_sdk.secret import DEFAULT_REDACTION_TEXT, DebugMode, Option, RedactionText

DEFAULT_SERVICE_ACCOUNT_FILE = "~/.rubrik/polaris-service-account.json"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"  # trace | debug | info | warn | error | fatal


@dataclass
class RedactionConfig:
    """Redaction of secrets in log output."""

    debug_mode: bool = False
    text: str = DEFAULT_REDACTION_TEXT

    def options(self) -> list[Option]:
        """Return the redact options matching this configuration."""
        return [DebugMode(self.debug_mode), RedactionText(self.text)]


@dataclass
class SDKConfig:
    """Complete SDK configuration."""

    log: LogConfig = field(default_factory=LogConfig)
    redaction: RedactionConfig = field(default_factory=RedactionConfig)
    service_account_file: str = DEFAULT_SERVICE_ACCOUNT_FILE
