from typing import Optional
from components.resource_manager import AzureResourceManager
from .config import config

class ResourceManagerFactory:
    """
    Factory class to return a ResourceManager backed by the Azure SDK.
    """
    @staticmethod
    def get_resource_manager(subscription_id: Optional[str] = None) -> AzureResourceManager:
        """
        Factory function to return an AzureResourceManager for a subscription.

        It uses the config.py file to get the Resource Management client.

        Args:
            subscription_id (str): The subscription to manage. Defaults to AZURE_SUBSCRIPTION_ID.
        Returns:
            An AzureResourceManager wrapping a ResourceManagementClient.
        """
        return AzureResourceManager(config.get_resource_management_client(subscription_id))
