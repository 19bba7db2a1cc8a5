"""
Polls a compute resource until its provisioning state is terminal.

Polling runs in two phases: wait for the resource to exist, then wait for its
provisioningState to reach Succeeded, Canceled or Failed. Both phases use a
constant interval. The state is fetched fresh on every attempt.

Errors from the management API are not retried; only a pending state is.
"""

import logging
import threading
from typing import Optional
from components.clock import Clock
from components.errors import (
    DeadlineExceeded,
    MissingProvisioningState,
    PollingCancelled,
    UnknownProvisioningState,
)
from components.models import GenericResourceRecord
from components.provisioning_state import StatePhase, classify
from components.resource_manager import ResourceManager

logger = logging.getLogger(__name__)

COMPUTE_PROVIDER_NAMESPACE = "Microsoft.Compute"
COMPUTE_API_VERSION = "2016-04-30-preview"
DEFAULT_POLL_INTERVAL_SECONDS = 5.0


class ProvisioningPoller:
    """
    Args:
        resource_manager: Management API used for the existence checks and reads.
        clock: Time source and sleep; defaults to the real clock.
        poll_interval: Seconds to sleep between attempts.
        timeout: Overall limit in seconds for one wait, or None for no limit.
        max_attempts: Limit on attempts per phase, or None for no limit.
        cancel_event: Checked before every attempt; raises PollingCancelled once set.
        fail_on_unknown: Raise UnknownProvisioningState instead of continuing
            to poll when an unrecognised state is observed.
        provider_namespace: Resource provider of the polled resource.
        api_version: API version used to address the resource.
    """

    def __init__(
        self,
        resource_manager: ResourceManager,
        clock: Optional[Clock] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
        fail_on_unknown: bool = False,
        provider_namespace: str = COMPUTE_PROVIDER_NAMESPACE,
        api_version: str = COMPUTE_API_VERSION,
    ):
        self.resource_manager = resource_manager
        self.clock = clock or Clock()
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.cancel_event = cancel_event
        self.fail_on_unknown = fail_on_unknown
        self.provider_namespace = provider_namespace
        self.api_version = api_version

    def _check_limits(self, started: float, attempts: int, what: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise PollingCancelled(f"Cancelled while waiting for {what}")
        elapsed = self.clock.now() - started
        if self.max_attempts is not None and attempts >= self.max_attempts:
            raise DeadlineExceeded(
                f"Gave up waiting for {what} after {attempts} attempts",
                attempts=attempts,
                elapsed=elapsed,
            )
        if self.timeout is not None and elapsed >= self.timeout:
            raise DeadlineExceeded(
                f"Gave up waiting for {what} after {elapsed:.0f}s",
                attempts=attempts,
                elapsed=elapsed,
            )

    def _get_resource(self, resource_group_name: str, resource_name: str, resource_type: str) -> GenericResourceRecord:
        return self.resource_manager.get_generic_resource(
            resource_group_name=resource_group_name,
            provider_namespace=self.provider_namespace,
            parent_path="",
            resource_type=resource_type,
            resource_name=resource_name,
            api_version=self.api_version,
        )

    def wait_for_resource_existence(
        self,
        resource_group_name: str,
        resource_name: str,
        resource_type: str,
        started: Optional[float] = None,
    ) -> int:
        """Block until the resource exists. Returns the number of checks made."""
        started = self.clock.now() if started is None else started
        what = f"{resource_type} {resource_name} to exist"
        attempts = 0
        while True:
            self._check_limits(started, attempts, what)
            attempts += 1
            exists = self.resource_manager.generic_resource_exists(
                resource_group_name=resource_group_name,
                provider_namespace=self.provider_namespace,
                parent_path="",
                resource_type=resource_type,
                resource_name=resource_name,
                api_version=self.api_version,
            )
            if exists:
                logger.info(f"{resource_type} {resource_name} exists after {attempts} check(s)")
                return attempts
            logger.info(f"{resource_type} {resource_name} not found yet, retrying in {self.poll_interval}s")
            self.clock.sleep(self.poll_interval)

    def wait_for_terminal_state(
        self,
        resource_group_name: str,
        resource_name: str,
        resource_type: str,
        started: Optional[float] = None,
    ) -> str:
        """Block until the resource reaches a terminal provisioning state and return it."""
        started = self.clock.now() if started is None else started
        what = f"{resource_type} {resource_name} to finish provisioning"
        attempts = 0
        while True:
            self._check_limits(started, attempts, what)
            attempts += 1
            resource = self._get_resource(resource_group_name, resource_name, resource_type)
            if "provisioningState" not in resource.properties:
                raise MissingProvisioningState(resource_name)
            state = resource.provisioning_state
            phase = classify(state)
            logger.info(f"{resource_type} {resource_name} provisioning state: {state}")

            if phase in (StatePhase.ENDED, StatePhase.SUCCEEDED):
                return state
            if phase is StatePhase.UNKNOWN:
                if self.fail_on_unknown:
                    raise UnknownProvisioningState(state)
                logger.warning(f"Unrecognised provisioning state {state!r} for {resource_name}, still polling")
            self.clock.sleep(self.poll_interval)

    def wait_for_resource_provisioning(self, resource_group_name: str, resource_name: str, resource_type: str) -> bool:
        """
        Wait for the resource to appear and then to finish provisioning.

        Returns:
            True if the final provisioning state is Succeeded, False if it
            is Canceled or Failed.

        Raises:
            DeadlineExceeded: If the timeout or attempt cap is reached.
            PollingCancelled: If the cancellation event is set.
            MissingProvisioningState: If the resource reports no state.
        """
        started = self.clock.now()
        self.wait_for_resource_existence(resource_group_name, resource_name, resource_type, started=started)
        state = self.wait_for_terminal_state(resource_group_name, resource_name, resource_type, started=started)
        succeeded = classify(state) is StatePhase.SUCCEEDED
        if succeeded:
            logger.info(f"{resource_type} {resource_name} provisioned successfully.")
        else:
            logger.error(f"{resource_type} {resource_name} provisioning ended in state {state}.")
        return succeeded
