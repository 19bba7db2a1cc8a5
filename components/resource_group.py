"""
Idempotent creation and deletion of resource groups.

Both operations check existence first and then act. The two calls are not
atomic: a group created or deleted by someone else in between is not
detected. Creation goes through create_or_update, so losing that race still
leaves the group in place.
"""

import logging
from components.resource_manager import ResourceManager

logger = logging.getLogger(__name__)


class ResourceGroupGuard:
    def __init__(self, resource_manager: ResourceManager):
        self.resource_manager = resource_manager

    def resource_group_exists(self, name: str) -> bool:
        return self.resource_manager.resource_group_exists(name)

    def ensure_resource_group(self, name: str, location: str) -> bool:
        """
        Create the resource group if it does not exist.

        Returns:
            True if a create call was issued, False if the group already existed.
        """
        if self.resource_group_exists(name):
            logger.info(f"Resource group {name} already exists, skipping creation.")
            return False

        self.resource_manager.create_resource_group(name, location)
        logger.info(f"Created resource group {name} in {location}")
        return True

    def delete_resource_group(self, name: str) -> bool:
        """
        Delete the resource group if it exists.

        Returns:
            True if a delete call was issued.
        """
        if not self.resource_group_exists(name):
            logger.info(f"Resource group {name} does not exist, nothing to delete.")
            return False

        self.resource_manager.delete_resource_group(name)
        logger.info(f"Deleted resource group {name}")
        return True
