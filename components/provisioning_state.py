"""
Provisioning state values reported by Azure Resource Manager and their
classification into running / ended / succeeded buckets.

Matching is exact and case-sensitive. Anything outside the running and ended
sets classifies as UNKNOWN, including documented values such as "Deleting"
that never occur while a deployment converges.
"""

from enum import Enum
from typing import Optional


class ProvisioningState(str, Enum):
    # https://learn.microsoft.com/rest/api/resources/deployments/get
    ACCEPTED = "Accepted"
    CANCELED = "Canceled"
    CREATED = "Created"
    CREATING = "Creating"
    DELETED = "Deleted"
    DELETING = "Deleting"
    FAILED = "Failed"
    NOT_SPECIFIED = "NotSpecified"
    REGISTERING = "Registering"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"


class StatePhase(Enum):
    RUNNING = "running"
    ENDED = "ended"
    SUCCEEDED = "succeeded"
    UNKNOWN = "unknown"


RUNNING_STATES = frozenset({
    ProvisioningState.ACCEPTED.value,
    ProvisioningState.REGISTERING.value,
    ProvisioningState.CREATING.value,
    ProvisioningState.RUNNING.value,
})

ENDED_STATES = frozenset({
    ProvisioningState.SUCCEEDED.value,
    ProvisioningState.CANCELED.value,
    ProvisioningState.FAILED.value,
})


def classify(state: Optional[str]) -> StatePhase:
    """
    Classify a provisioning state string.

    SUCCEEDED is reported instead of ENDED for "Succeeded"; use is_ended()
    to test for any terminal state.
    """
    if isinstance(state, ProvisioningState):
        state = state.value
    if state == ProvisioningState.SUCCEEDED.value:
        return StatePhase.SUCCEEDED
    if state in ENDED_STATES:
        return StatePhase.ENDED
    if state in RUNNING_STATES:
        return StatePhase.RUNNING
    return StatePhase.UNKNOWN


def is_running(state: Optional[str]) -> bool:
    return classify(state) is StatePhase.RUNNING


def is_ended(state: Optional[str]) -> bool:
    return classify(state) in (StatePhase.ENDED, StatePhase.SUCCEEDED)


def is_succeeded(state: Optional[str]) -> bool:
    return classify(state) is StatePhase.SUCCEEDED
