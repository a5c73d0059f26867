"""Data center archival payloads.

Parameters for the AWS data center cloud account and AWS (Amazon S3)
archival target mutations. Every credential is a String so request logging
redacts it.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from polaris_sdk.secret import String

from .request import GraphQLRequest

CREATE_AWS_ACCOUNT_QUERY = """mutation SdkPythonCreateAwsAccount($name: String!, $description: String, $accessKey: String!, $secretKey: String!) {
    result: createAwsAccount(input: {
        name:        $name,
        description: $description,
        accessKey:   $accessKey,
        secretKey:   $secretKey,
    }) {
        cloudAccountId
    }
}"""

UPDATE_AWS_ACCOUNT_QUERY = """mutation SdkPythonUpdateAwsAccount($id: UUID!, $name: String!, $description: String, $accessKey: String!, $secretKey: String!) {
    result: updateAwsAccount(input: {
        id:          $id,
        name:        $name,
        description: $description,
        accessKey:   $accessKey,
        secretKey:   $secretKey,
    }) {
        cloudAccountId
    }
}"""

CREATE_AWS_TARGET_QUERY = """mutation SdkPythonCreateAwsTarget($input: CreateAwsTargetInput!) {
    result: createAwsTarget(input: $input) {
        id
    }
}"""


class _Params(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateAWSCloudAccountParams(_Params):
    """Parameters for an AWS data center cloud account create operation."""

    name: str
    description: str = ""
    access_key: String
    secret_key: String

    def create_query(self) -> GraphQLRequest:
        return GraphQLRequest(CREATE_AWS_ACCOUNT_QUERY, self)


class UpdateAWSCloudAccountParams(CreateAWSCloudAccountParams):
    """Parameters for an AWS data center cloud account update operation."""

    def update_query(self, cloud_account_id: uuid.UUID) -> GraphQLRequest:
        return GraphQLRequest(
            UPDATE_AWS_ACCOUNT_QUERY,
            {
                "id": cloud_account_id,
                "name": self.name,
                "description": self.description,
                "accessKey": self.access_key,
                "secretKey": self.secret_key,
            },
        )


class AWSTargetCloudComputeSettings(_Params):
    """Cloud compute settings for an AWS target."""

    vpc_id: str
    subnet_id: str
    security_group_id: str


class AWSTargetProxySettings(_Params):
    """Proxy settings for an AWS target."""

    username: str = ""
    password: String = String("")
    proxy_server: str
    protocol: str
    port_number: int


class AWSTargetImmutabilitySettings(_Params):
    """Immutability settings for an AWS target."""

    lock_duration_days: int


class CreateAWSTargetParams(_Params):
    """Parameters for an AWS target (Amazon S3 in the RSC UI) create operation."""

    name: str
    cluster_id: uuid.UUID = Field(alias="clusterUuid")
    cloud_account_id: uuid.UUID
    bucket_name: str
    region: str
    storage_class: str
    retrieval_tier: str | None = Field(default=None, alias="awsRetrievalTier")
    kms_master_key_id: str | None = None
    rsa_key: String | None = None
    encryption_password: String | None = None
    cloud_compute_settings: AWSTargetCloudComputeSettings | None = None
    is_consolidation_enabled: bool = False
    proxy_settings: AWSTargetProxySettings | None = None
    bypass_proxy: bool = False
    compute_proxy_settings: AWSTargetProxySettings | None = None
    immutability_settings: AWSTargetImmutabilitySettings | None = None
    s3_endpoint: str | None = None
    kms_endpoint: str | None = None

    def create_query(self) -> GraphQLRequest:
        return GraphQLRequest(CREATE_AWS_TARGET_QUERY, {"input": self})
