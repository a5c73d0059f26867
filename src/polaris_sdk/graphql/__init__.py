"""GraphQL request envelopes and payload models."""

from .archival import (
    AWSTargetCloudComputeSettings,
    AWSTargetImmutabilitySettings,
    AWSTargetProxySettings,
    CreateAWSCloudAccountParams,
    CreateAWSTargetParams,
    UpdateAWSCloudAccountParams,
)
from .request import GraphQLRequest, operation_name

__all__ = [
    "AWSTargetCloudComputeSettings",
    "AWSTargetImmutabilitySettings",
    "AWSTargetProxySettings",
    "CreateAWSCloudAccountParams",
    "CreateAWSTargetParams",
    "GraphQLRequest",
    "UpdateAWSCloudAccountParams",
    "operation_name",
]
