"""The sensitive text type."""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class String(str):
    """Text that can be redacted.

    A String behaves like a plain str everywhere: it compares, hashes,
    formats and serializes as its text. Only redact treats it differently,
    replacing every String reachable through public fields with the
    redaction text. Wrap every credential in String, plain str values are
    never redacted regardless of the field name.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"String({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(),
        )
