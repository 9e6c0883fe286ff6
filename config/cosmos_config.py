"""
Azure Cosmos DB Configuration.

Connection parameters, target database/container, and the client-side retry
policy for throttled requests.

Authentication:
    1. COSMOS_CONNECTION_STRING (account key, local development)
    2. COSMOS_ENDPOINT + DefaultAzureCredential (managed identity, az login)

Exports:
    CosmosConfig: Pydantic model loaded from environment
"""

import os
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from exceptions import ConfigurationError
from .defaults import CosmosDefaults


class CosmosConfig(BaseModel):
    """
    Cosmos DB configuration.

    Exactly one authentication source is used: a connection string wins over
    an endpoint when both are set.
    """

    connection_string: Optional[str] = Field(default=None, description="Account connection string (contains key)")
    endpoint: Optional[str] = Field(default=None, description="Account URI for DefaultAzureCredential auth")
    database_name: str = Field(default=CosmosDefaults.DATABASE_NAME)
    container_name: str = Field(default=CosmosDefaults.CONTAINER_NAME)
    partition_key_path: str = Field(default=CosmosDefaults.PARTITION_KEY_PATH)
    provisioned_throughput: int = Field(default=CosmosDefaults.PROVISIONED_THROUGHPUT, ge=400)
    minimum_throughput: int = Field(default=CosmosDefaults.MINIMUM_THROUGHPUT, ge=400)
    consistency_level: str = Field(default=CosmosDefaults.CONSISTENCY_LEVEL)
    max_retry_attempts_on_throttle: int = Field(default=CosmosDefaults.MAX_RETRY_ATTEMPTS_ON_THROTTLE, ge=0)
    max_retry_wait_seconds: int = Field(default=CosmosDefaults.MAX_RETRY_WAIT_SECONDS, ge=0)

    @field_validator('partition_key_path')
    @classmethod
    def validate_partition_key_path(cls, v):
        if not v.startswith('/') or len(v) < 2:
            raise ValueError(f"Partition key path must look like '/field', got {v!r}")
        return v

    @field_validator('consistency_level')
    @classmethod
    def validate_consistency_level(cls, v):
        valid_levels = ['Strong', 'BoundedStaleness', 'Session', 'ConsistentPrefix', 'Eventual']
        if v not in valid_levels:
            raise ValueError(f"Invalid consistency level: {v}. Must be one of {valid_levels}")
        return v

    @model_validator(mode='after')
    def validate_throughput_range(self):
        if self.minimum_throughput > self.provisioned_throughput:
            raise ValueError(
                f"minimum_throughput ({self.minimum_throughput}) exceeds "
                f"provisioned_throughput ({self.provisioned_throughput})"
            )
        return self

    @property
    def partition_key_field(self) -> str:
        """Top-level document field named by the partition key path."""
        return self.partition_key_path.lstrip('/').split('/')[0]

    @property
    def uses_managed_identity(self) -> bool:
        return not self.connection_string

    def debug_dict(self) -> dict:
        """Debug output with masked connection string."""
        return {
            "connection_string": "***MASKED***" if self.connection_string else None,
            "endpoint": self.endpoint,
            "database_name": self.database_name,
            "container_name": self.container_name,
            "partition_key_path": self.partition_key_path,
            "provisioned_throughput": self.provisioned_throughput,
            "minimum_throughput": self.minimum_throughput,
            "consistency_level": self.consistency_level,
            "max_retry_attempts_on_throttle": self.max_retry_attempts_on_throttle,
            "max_retry_wait_seconds": self.max_retry_wait_seconds,
        }

    @classmethod
    def from_environment(cls) -> "CosmosConfig":
        """
        Load from environment variables.

        Raises:
            ConfigurationError: Neither COSMOS_CONNECTION_STRING nor COSMOS_ENDPOINT set,
                or a numeric variable is not an integer
        """
        connection_string = os.environ.get("COSMOS_CONNECTION_STRING") or None
        endpoint = os.environ.get("COSMOS_ENDPOINT") or None
        if not connection_string and not endpoint:
            raise ConfigurationError(
                "COSMOS_CONNECTION_STRING or COSMOS_ENDPOINT environment variable must be set"
            )

        try:
            return cls(
                connection_string=connection_string,
                endpoint=endpoint,
                database_name=os.environ.get("COSMOS_DATABASE_NAME", CosmosDefaults.DATABASE_NAME),
                container_name=os.environ.get("COSMOS_CONTAINER_NAME", CosmosDefaults.CONTAINER_NAME),
                partition_key_path=os.environ.get("COSMOS_PARTITION_KEY_PATH", CosmosDefaults.PARTITION_KEY_PATH),
                provisioned_throughput=int(os.environ.get(
                    "COSMOS_PROVISIONED_THROUGHPUT", str(CosmosDefaults.PROVISIONED_THROUGHPUT))),
                minimum_throughput=int(os.environ.get(
                    "COSMOS_MINIMUM_THROUGHPUT", str(CosmosDefaults.MINIMUM_THROUGHPUT))),
                consistency_level=os.environ.get("COSMOS_CONSISTENCY_LEVEL", CosmosDefaults.CONSISTENCY_LEVEL),
                max_retry_attempts_on_throttle=int(os.environ.get(
                    "COSMOS_MAX_RETRY_ATTEMPTS", str(CosmosDefaults.MAX_RETRY_ATTEMPTS_ON_THROTTLE))),
                max_retry_wait_seconds=int(os.environ.get(
                    "COSMOS_MAX_RETRY_WAIT_SECONDS", str(CosmosDefaults.MAX_RETRY_WAIT_SECONDS))),
            )
        except ValueError as e:
            # pydantic.ValidationError subclasses ValueError
            raise ConfigurationError(f"Invalid Cosmos configuration: {e}") from e
