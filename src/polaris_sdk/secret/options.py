"""Options accepted by redact."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

DEFAULT_REDACTION_TEXT = "REDACTED"


@dataclass(frozen=True)
class RedactOptions:
    """Configuration for a single redact call."""

    debug_mode: bool = False
    redaction_text: str = DEFAULT_REDACTION_TEXT


DEFAULT_OPTIONS = RedactOptions()


class Option(ABC):
    """Option can be provided to redact to modify its behavior."""

    @abstractmethod
    def apply(self, options: RedactOptions) -> RedactOptions:
        """Return options with this option applied."""


@dataclass(frozen=True)
class DebugMode(Option):
    """Log each step of the redaction process. Defaults to off."""

    enabled: bool = True

    def apply(self, options: RedactOptions) -> RedactOptions:
        return replace(options, debug_mode=bool(self.enabled))


@dataclass(frozen=True)
class RedactionText(Option):
    """Text to replace sensitive data with. Defaults to REDACTED."""

    text: str

    def apply(self, options: RedactOptions) -> RedactOptions:
        return replace(options, redaction_text=str(self.text))


def build_options(*options: Option) -> RedactOptions:
    """Apply options in order on top of the defaults.

    Raises:
        TypeError: If an argument is not an Option
    """
    result = DEFAULT_OPTIONS
    for option in options:
        if not isinstance(option, Option):
            raise TypeError(f"expected a redaction Option, got {type(option).__name__}")
        result = option.apply(result)
    return result
