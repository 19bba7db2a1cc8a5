"""
Records returned by the resource manager adapter.

Only the fields the orchestration reads are modelled; the rest of the SDK
object is dropped.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class DeploymentRecord(BaseModel):
    """A deployment as seen through the management API."""
    name: str
    provisioning_state: Optional[str] = None


class GenericResourceRecord(BaseModel):
    """A resource addressed by provider namespace, type and API version."""
    name: str
    id: Optional[str] = None
    type: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)

    @property
    def provisioning_state(self) -> Optional[str]:
        return self.properties.get("provisioningState")
