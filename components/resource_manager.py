"""
The management API surface the orchestration depends on, and its Azure
implementation on top of azure-mgmt-resource.

Everything above this module talks to ``ResourceManager`` only, so tests can
substitute an in-memory fake.
"""

import logging
from typing import Any, Dict, Optional, Protocol
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.resource.resources.models import DeploymentMode
from components.models import DeploymentRecord, GenericResourceRecord

logger = logging.getLogger(__name__)

# Suppress logging for azure sdk
logging.getLogger("azure").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.mgmt.resource").setLevel(logging.WARNING)


class ResourceManager(Protocol):
    def resource_group_exists(self, name: str) -> bool: ...

    def create_resource_group(self, name: str, location: str) -> None: ...

    def delete_resource_group(self, name: str) -> None: ...

    def deployment_exists(self, resource_group_name: str, deployment_name: str) -> bool: ...

    def get_deployment(self, resource_group_name: str, deployment_name: str) -> DeploymentRecord: ...

    def submit_deployment(
        self,
        resource_group_name: str,
        deployment_name: str,
        location: str,
        template: Dict[str, Any],
        parameters: Dict[str, Any],
        mode: str = DeploymentMode.INCREMENTAL,
    ) -> None: ...

    def generic_resource_exists(
        self,
        resource_group_name: str,
        provider_namespace: str,
        parent_path: str,
        resource_type: str,
        resource_name: str,
        api_version: str,
    ) -> bool: ...

    def get_generic_resource(
        self,
        resource_group_name: str,
        provider_namespace: str,
        parent_path: str,
        resource_type: str,
        resource_name: str,
        api_version: str,
    ) -> GenericResourceRecord: ...


def _enum_value(value):
    return getattr(value, "value", value)


class AzureResourceManager:
    """
    ResourceManager backed by a ResourceManagementClient.

    SDK errors (azure.core.exceptions.AzureError and subclasses) are not
    caught here.
    """

    def __init__(self, client: ResourceManagementClient):
        self.client = client

    # --- Resource groups ---

    def resource_group_exists(self, name: str) -> bool:
        return bool(self.client.resource_groups.check_existence(name))

    def create_resource_group(self, name: str, location: str) -> None:
        self.client.resource_groups.create_or_update(name, {"location": location})

    def delete_resource_group(self, name: str) -> None:
        self.client.resource_groups.begin_delete(name).result()

    # --- Deployments ---

    def deployment_exists(self, resource_group_name: str, deployment_name: str) -> bool:
        return bool(self.client.deployments.check_existence(resource_group_name, deployment_name))

    def get_deployment(self, resource_group_name: str, deployment_name: str) -> DeploymentRecord:
        deployment = self.client.deployments.get(resource_group_name, deployment_name)
        properties = deployment.properties
        state = properties.provisioning_state if properties is not None else None
        return DeploymentRecord(
            name=deployment.name or deployment_name,
            provisioning_state=_enum_value(state),
        )

    def submit_deployment(
        self,
        resource_group_name: str,
        deployment_name: str,
        location: str,
        template: Dict[str, Any],
        parameters: Dict[str, Any],
        mode: str = DeploymentMode.INCREMENTAL,
    ) -> None:
        # Resource group deployments take their location from the group,
        # so it is only logged here.
        logger.info(
            f"Submitting deployment {deployment_name} to resource group {resource_group_name} ({location})"
        )
        # Not awaited; progress is tracked on the deployed resource.
        self.client.deployments.begin_create_or_update(
            resource_group_name,
            deployment_name,
            {
                "properties": {
                    "mode": mode,
                    "template": template,
                    "parameters": parameters,
                }
            },
        )

    # --- Generic resources ---

    def generic_resource_exists(
        self,
        resource_group_name: str,
        provider_namespace: str,
        parent_path: str,
        resource_type: str,
        resource_name: str,
        api_version: str,
    ) -> bool:
        return bool(self.client.resources.check_existence(
            resource_group_name=resource_group_name,
            resource_provider_namespace=provider_namespace,
            parent_resource_path=parent_path,
            resource_type=resource_type,
            resource_name=resource_name,
            api_version=api_version,
        ))

    def get_generic_resource(
        self,
        resource_group_name: str,
        provider_namespace: str,
        parent_path: str,
        resource_type: str,
        resource_name: str,
        api_version: str,
    ) -> GenericResourceRecord:
        resource = self.client.resources.get(
            resource_group_name=resource_group_name,
            resource_provider_namespace=provider_namespace,
            parent_resource_path=parent_path,
            resource_type=resource_type,
            resource_name=resource_name,
            api_version=api_version,
        )
        properties: Optional[Dict[str, Any]] = resource.properties
        return GenericResourceRecord(
            id=resource.id,
            name=resource.name or resource_name,
            type=resource.type,
            properties=dict(properties or {}),
        )
