"""Sensitive value redaction.

Wrap credentials in String and pass values through redact before logging
them:

    from polaris_sdk.secret import String, redact

    params = CreateAWSCloudAccountParams(..., secret_key=String(key))
    logger.debug("creating account", params=redact(params))
"""

from .marker import String
from .options import (
    DEFAULT_OPTIONS,
    DEFAULT_REDACTION_TEXT,
    DebugMode,
    Option,
    RedactionText,
    RedactOptions,
)
from .secret import redact

__all__ = [
    "DEFAULT_OPTIONS",
    "DEFAULT_REDACTION_TEXT",
    "DebugMode",
    "Option",
    "RedactOptions",
    "RedactionText",
    "String",
    "redact",
]
