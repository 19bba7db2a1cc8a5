"""
State schema for the deployment graph.
"""

from typing import TypedDict, Optional, Union


class DeploymentState(TypedDict, total=False):
    """
    State schema for the deployment graph.
    """
    resource_group_name: str
    location: str
    deployment_name: str
    template_path: str
    parameters: Optional[Union[str, dict]]
    resource_name: Optional[str]
    resource_type: Optional[str]
    deployment_submitted: Optional[bool]
    provisioning_succeeded: Optional[bool]
