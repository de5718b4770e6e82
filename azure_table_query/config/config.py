import logging
import os
import re
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()

# Well-known development account shipped with the Azurite emulator
AZURITE_ACCOUNT_NAME = "devstoreaccount1"
AZURITE_ACCOUNT_KEY = (
    "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="
)
AZURITE_TABLE_ENDPOINT = "http://127.0.0.1:10002/devstoreaccount1"

_ACCOUNT_NAME_PATTERN = re.compile(r"^[a-z0-9]{3,24}$")


class TableStorageConfig(BaseModel):
    """Configuration for Azure Table Storage connection and queries."""

    account_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AZURE_STORAGE_ACCOUNT_NAME"),
        description="Storage account name"
    )

    account_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AZURE_STORAGE_ACCOUNT_KEY"),
        description="Storage account shared key"
    )

    connection_string: Optional[str] = Field(
        default_factory=lambda: os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
        description="Full storage connection string (takes precedence over name/key)"
    )

    # Endpoint settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("AZURE_TABLES_ENDPOINT_URL"),
        description="Table service endpoint URL (for Azurite or sovereign clouds)"
    )

    endpoint_suffix: str = Field(
        default_factory=lambda: os.getenv("AZURE_STORAGE_ENDPOINT_SUFFIX", "core.windows.net"),
        description="DNS suffix used to derive the endpoint from the account name"
    )

    # Table configuration
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("AZURE_TABLES_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    # Connection settings
    timeout_seconds: float = Field(
        default=30.0,
        description="Connect and read timeout in seconds"
    )

    retries: int = Field(
        default=0,
        description="Retry attempts handed to the SDK retry policy (0 surfaces failures immediately)"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, staging, prod)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("AZURE_TABLES_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for table queries"
    )

    @field_validator('account_name')
    @classmethod
    def validate_account_name(cls, v):
        """Validate storage account name format."""
        if v is None:
            return v
        if not _ACCOUNT_NAME_PATTERN.match(v):
            raise ValueError("Storage account name must be 3-24 lowercase letters or digits")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('retries')
    @classmethod
    def validate_retries(cls, v):
        if v < 0:
            raise ValueError("retries must not be negative")
        return v

    @property
    def table_endpoint(self) -> Optional[str]:
        """Table service endpoint, explicit or derived from the account name."""
        if self.endpoint_url:
            return self.endpoint_url.rstrip("/")
        if self.account_name:
            return f"https://{self.account_name}.table.{self.endpoint_suffix}"
        return None

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with prefix and environment.

        Table names are alphanumeric only, so the parts are concatenated
        without a separator.

        Args:
            base_name: Base table name

        Returns:
            Full table name with prefix and environment
        """
        parts = []

        if self.table_prefix:
            parts.append(self.table_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "".join(parts)

    def apply_logging(self) -> None:
        """Lower the package logger to DEBUG when debug logging is enabled."""
        if self.enable_debug_logging:
            logging.getLogger("azure_table_query").setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls) -> 'TableStorageConfig':
        """Create configuration from environment variables.

        Returns:
            TableStorageConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'TableStorageConfig':
        """Create configuration for the local Azurite emulator.

        Returns:
            TableStorageConfig instance configured for local development
        """
        return cls(
            account_name=AZURITE_ACCOUNT_NAME,
            account_key=AZURITE_ACCOUNT_KEY,
            connection_string=None,
            endpoint_url=AZURITE_TABLE_ENDPOINT,
            environment="dev",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
