"""
Exceptions raised by the deployment orchestration components.

Management API failures are not wrapped: whatever the Azure SDK raises reaches
the caller unchanged. ``ManagementApiError`` names the base class of those
errors so callers can catch them without importing ``azure.core`` themselves.
"""

from azure.core.exceptions import AzureError

ManagementApiError = AzureError


class OrchestrationError(Exception):
    """Base class for errors raised by the orchestration components."""


class TemplateReadError(OrchestrationError):
    """The template (or parameters) file is missing, unreadable or not a JSON object."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read template '{path}': {reason}")


class UnknownProvisioningState(OrchestrationError):
    """A provisioning state outside the recognised Running/Ended sets."""

    def __init__(self, state):
        self.state = state
        super().__init__(f"Unknown provisioning state: {state!r}")


class MissingProvisioningState(OrchestrationError):
    """The resource properties carry no provisioningState value."""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        super().__init__(f"Resource '{resource_name}' has no provisioningState property")


class DeadlineExceeded(OrchestrationError):
    """Polling ran past its timeout or attempt cap."""

    def __init__(self, message: str, attempts: int = 0, elapsed: float = 0.0):
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(message)


class PollingCancelled(OrchestrationError):
    """The cancellation signal was set while polling."""
