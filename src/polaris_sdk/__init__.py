"""Polaris SDK - Python foundation of the Rubrik Security Cloud SDK.

Secret redaction for log output, structured logging and errors, SDK and
service account configuration, and GraphQL request envelopes.
"""

from polaris_sdk.secret import DebugMode, RedactionText, String, redact

__version__ = "0.1.0"
__all__ = ["__version__", "DebugMode", "RedactionText", "String", "redact"]
