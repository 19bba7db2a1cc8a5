"""
This module contains the building blocks of the ARM deployment workflow.
"""

from .deployment import DeploymentGuard
from .poller import ProvisioningPoller
from .resource_group import ResourceGroupGuard
from .resource_manager import AzureResourceManager, ResourceManager

__all__ = [
    "AzureResourceManager",
    "DeploymentGuard",
    "ProvisioningPoller",
    "ResourceGroupGuard",
    "ResourceManager",
]
