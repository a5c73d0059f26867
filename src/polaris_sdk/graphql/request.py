"""GraphQL request envelope.

Builds the JSON body posted to the RSC GraphQL endpoint and logs it with all
secrets redacted. Sending the request is left to the transport.
"""

import dataclasses
import json
import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from polaris_sdk.errors import create_error
from polaris_sdk.log import DiscardLogger, LogLevel, PolarisLogger
from polaris_sdk.secret import Option, redact


def operation_name(query: str) -> str:
    """Extract the operation name from a query.

    The name is the text between the first space and the first opening
    parenthesis, e.g. "SdkCreateAwsAccount" for
    "mutation SdkCreateAwsAccount($name: String!) {...}". Returns an empty
    string when the query has no such name.
    """
    i = query.find(" ")
    j = query.find("(")
    if i == -1 or j == -1 or j <= i:
        return ""
    return query[i + 1 : j].strip()


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: getattr(obj, f.name)
            for f in dataclasses.fields(obj)
            if not f.name.startswith("_")
        }
    if isinstance(obj, uuid.UUID):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclasses.dataclass(frozen=True)
class GraphQLRequest:
    """A GraphQL query or mutation with its variables."""

    query: str
    variables: Any = None

    def __post_init__(self) -> None:
        if not self.query or not self.query.strip():
            raise create_error("QUERY_INVALID")

    @property
    def operation(self) -> str:
        """Operation name, sent for server-side metrics."""
        return operation_name(self.query)

    def body(self) -> dict[str, Any]:
        """Request body, without empty variables or operation name."""
        body: dict[str, Any] = {"query": self.query}
        if self.variables is not None:
            body["variables"] = self.variables
        if operation := self.operation:
            body["operationName"] = operation
        return body

    def encode(self) -> bytes:
        """Encode the request body as UTF-8 JSON."""
        return json.dumps(self.body(), default=_json_default).encode("utf-8")

    def redacted(self, *options: Option) -> "GraphQLRequest":
        """Return a copy of the request with the variables redacted."""
        return GraphQLRequest(self.query, redact(self.variables, *options))

    def log(self, logger: PolarisLogger | DiscardLogger, *options: Option) -> None:
        """Write the request, with secrets redacted, to logger at TRACE level."""
        if not logger.is_enabled_for(LogLevel.TRACE):
            return

        logger.trace(
            "polaris/graphql.Request",
            operation=self.operation,
            request=self.redacted(*options).encode().decode("utf-8"),
        )
