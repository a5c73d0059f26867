"""Redaction of sensitive values before they are logged."""

from typing import TypeVar

from .options import Option, build_options
from .proxy import Kind, classify, proxy_value

T = TypeVar("T")


def redact(value: T, *options: Option) -> T:
    """Return a copy of value with every String replaced by the redaction text.

    The copy has the same type and shape as value. Tuples, lists, dicts,
    sets, dataclasses, pydantic models and namedtuples are rebuilt
    recursively; for dataclasses only public fields (names without a leading
    underscore) are copied, the others get their default value or None.
    Dictionary keys are redacted too, so distinct String keys collapse into
    a single key holding the value of the last one.

    None, functions, classes, queues and generators are returned as is.
    Values of any other type are leaves: a String leaf is replaced with
    String(redaction text), anything else is returned unchanged. A String
    held by an object the proxy does not know how to rebuild (a plain class
    instance, for example) is not redacted. Neither is a dataclass whose
    class cannot be instantiated without arguments or copied; it is
    returned as is.

    With DebugMode(True) every step writes a "Proxy <kind>" DEBUG record to
    the polaris.secret logger, regardless of the logger level set through
    set_log_level. Handler levels still apply.

    Args:
        value: Value to redact
        *options: DebugMode and RedactionText options, applied in order

    Returns:
        Redacted copy of value

    Raises:
        TypeError: If an option is not an Option instance
    """
    # Nothing to classify.
    if value is None:
        return value

    if classify(value) in (Kind.CHANNEL, Kind.FUNCTION):
        return value

    return proxy_value(value, build_options(*options))
