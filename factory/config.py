# app_config.py
import logging
import os
from typing import Optional
from azure.identity import DefaultAzureCredential
from azure.mgmt.resource import ResourceManagementClient
from dotenv import load_dotenv

load_dotenv()

class AppConfig:
    """Application configuration class that loads settings from environment variables."""

    def __init__(self):
        """Initialize the application configuration with environment variables."""
        # Azure authentication settings, read by DefaultAzureCredential
        self.AZURE_TENANT_ID = self._get_optional("AZURE_TENANT_ID")
        self.AZURE_CLIENT_ID = self._get_optional("AZURE_CLIENT_ID")
        self.AZURE_CLIENT_SECRET = self._get_optional("AZURE_CLIENT_SECRET")
        self.AZURE_SUBSCRIPTION_ID = self._get_optional("AZURE_SUBSCRIPTION_ID")

        # Polling settings
        self.ARM_POLL_INTERVAL_SECONDS = float(self._get_required("ARM_POLL_INTERVAL_SECONDS", "5"))
        self.ARM_PROVISIONING_TIMEOUT_SECONDS = self._get_timeout("ARM_PROVISIONING_TIMEOUT_SECONDS", "3600")

        # Compute resource addressing
        self.ARM_COMPUTE_PROVIDER_NAMESPACE = self._get_optional("ARM_COMPUTE_PROVIDER_NAMESPACE", "Microsoft.Compute")
        self.ARM_COMPUTE_API_VERSION = self._get_optional("ARM_COMPUTE_API_VERSION", "2016-04-30-preview")

        # Cached clients and resources
        self._azure_credentials = None

    @staticmethod
    def _get_required(name: str, default: Optional[str] = None) -> str:
        """Get a required configuration value from environment variables.

        Args:
            name: The name of the environment variable
            default: Optional default value if not found

        Returns:
            The value of the environment variable or default if provided

        Raises:
            ValueError: If the environment variable is not found and no default is provided
        """
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            logging.debug(
                "Environment variable %s not found, using default value", name
            )
            return default
        raise ValueError(
            f"Environment variable {name} not found and no default provided"
        )

    @staticmethod
    def _get_optional(name: str, default: str = "") -> str:
        """Get an optional configuration value from environment variables.

        Args:
            name: The name of the environment variable
            default: Default value if not found (default: "")

        Returns:
            The value of the environment variable or the default value
        """
        if name in os.environ:
            return os.environ[name]
        return default

    @classmethod
    def _get_timeout(cls, name: str, default: str) -> Optional[float]:
        """Get a timeout in seconds; an empty value or 0 disables the timeout."""
        raw = cls._get_optional(name, default).strip()
        if not raw:
            return None
        value = float(raw)
        return value if value > 0 else None

    def get_azure_credentials(self):
        """Get Azure credentials using DefaultAzureCredential.

        Returns:
            DefaultAzureCredential instance for Azure authentication
        """
        # Cache the credentials object
        if self._azure_credentials is None:
            self._azure_credentials = DefaultAzureCredential()
        return self._azure_credentials

    def get_resource_management_client(self, subscription_id: Optional[str] = None):
        """Get a Resource Management client for the given or configured subscription.

        Returns:
            A Resource Management client

        Raises:
            ValueError: If no subscription id is given or configured
        """
        subscription_id = subscription_id or self.AZURE_SUBSCRIPTION_ID
        if not subscription_id:
            raise ValueError("AZURE_SUBSCRIPTION_ID must be set to create a Resource Management client.")
        return ResourceManagementClient(self.get_azure_credentials(), subscription_id)

# Create a global instance of AppConfig
config = AppConfig()
