"""
This file contains the deployment orchestrator, wrapped in a class so the
management API, clock and polling limits can be swapped out.
"""

import argparse
import logging
import sys
import threading
from typing import Any, Optional
from components import DeploymentGuard, ProvisioningPoller, ResourceGroupGuard, ResourceManager
from components.clock import Clock
from components.deployment import load_parameters_file
from factory import ResourceManagerFactory, config
from graph import build_deployment_graph

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """
    Creates the resource group, submits the deployment and waits for the
    target compute resource, using the configured polling limits unless
    overridden.
    """
    def __init__(
        self,
        resource_manager: Optional[ResourceManager] = None,
        clock: Optional[Clock] = None,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
        fail_on_unknown: bool = False,
        subscription_id: Optional[str] = None,
    ):
        """
        Initialize the DeploymentOrchestrator with optional custom configuration.
        """
        self.subscription_id = subscription_id
        self.resource_manager = resource_manager or self._init_resource_manager()
        self.clock = clock or self._init_clock()
        self.resource_group_guard = self._init_resource_group_guard()
        self.deployment_guard = self._init_deployment_guard()
        self.poller = self._init_poller(
            poll_interval=config.ARM_POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval,
            timeout=self._resolve_timeout(timeout),
            max_attempts=max_attempts,
            cancel_event=cancel_event,
            fail_on_unknown=fail_on_unknown,
        )

    @staticmethod
    def _resolve_timeout(timeout: Optional[float]) -> Optional[float]:
        """Fall back to the configured timeout; zero or less means no timeout."""
        if timeout is None:
            return config.ARM_PROVISIONING_TIMEOUT_SECONDS
        return timeout if timeout > 0 else None

    def _init_resource_manager(self) -> ResourceManager:
        """Return the Azure-backed resource manager for the configured subscription."""
        return ResourceManagerFactory.get_resource_manager(self.subscription_id)

    def _init_clock(self) -> Clock:
        """Return the real clock."""
        return Clock()

    def _init_resource_group_guard(self) -> ResourceGroupGuard:
        return ResourceGroupGuard(self.resource_manager)

    def _init_deployment_guard(self) -> DeploymentGuard:
        return DeploymentGuard(self.resource_manager, self.resource_group_guard)

    def _init_poller(self, **limits: Any) -> ProvisioningPoller:
        """Return the provisioning poller for the configured compute provider."""
        return ProvisioningPoller(
            self.resource_manager,
            clock=self.clock,
            provider_namespace=config.ARM_COMPUTE_PROVIDER_NAMESPACE,
            api_version=config.ARM_COMPUTE_API_VERSION,
            **limits,
        )

    def ensure_resource_group(self, resource_group_name: str, location: str) -> bool:
        return self.resource_group_guard.ensure_resource_group(resource_group_name, location)

    def delete_resource_group(self, resource_group_name: str) -> bool:
        return self.resource_group_guard.delete_resource_group(resource_group_name)

    def start_deployment(self, resource_group_name, location, deployment_name, template_path, parameters=None) -> bool:
        return self.deployment_guard.start_deployment(
            resource_group_name, location, deployment_name, template_path, parameters
        )

    def wait_for_resource_provisioning(self, resource_group_name, resource_name, resource_type) -> bool:
        return self.poller.wait_for_resource_provisioning(resource_group_name, resource_name, resource_type)

    def build(self) -> Any:
        """
        Create and compile the deployment graph with the current configuration.
        Returns the compiled graph.
        """
        return build_deployment_graph(self.deployment_guard, self.poller)

    def run(
        self,
        resource_group_name: str,
        location: str,
        deployment_name: str,
        template_path: str,
        parameters=None,
        resource_name: Optional[str] = None,
        resource_type: Optional[str] = None,
    ) -> dict:
        """
        Run the whole flow and return the final graph state.

        Without a resource_name the flow stops once the deployment is submitted.
        """
        inputs = {
            "resource_group_name": resource_group_name,
            "location": location,
            "deployment_name": deployment_name,
            "template_path": template_path,
            "parameters": parameters,
            "resource_name": resource_name,
            "resource_type": resource_type,
        }
        try:
            return self.build().invoke(inputs)
        except Exception as e:
            logger.error(f"Deployment {deployment_name} failed: {e}")
            raise


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Deploy an ARM template and wait for a compute resource to finish provisioning"
    )
    parser.add_argument("--resource-group", required=True, help="Resource group name, created if missing")
    parser.add_argument("--location", required=True, help="Region for the resource group, e.g. 'West US'")
    parser.add_argument("--deployment-name", required=True, help="Deployment name")
    parser.add_argument("--template", required=True, help="Path to the ARM template JSON file")
    parser.add_argument("--parameters", default=None, help="Path to a deployment parameters JSON file")
    parser.add_argument("--resource-name", default=None, help="Compute resource to wait for")
    parser.add_argument("--resource-type", default="virtualMachines", help="Compute resource type (default: virtualMachines)")
    parser.add_argument("--subscription-id", default=None, help="Subscription id (default: AZURE_SUBSCRIPTION_ID)")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for provisioning")
    parser.add_argument("--poll-interval", type=float, default=None, help="Seconds between polls")
    return parser.parse_args(argv)


def main(argv=None, orchestrator: Optional[DeploymentOrchestrator] = None) -> int:
    args = parse_args(argv)
    parameters = load_parameters_file(args.parameters) if args.parameters else None
    orchestrator = orchestrator or DeploymentOrchestrator(
        subscription_id=args.subscription_id,
        timeout=args.timeout,
        poll_interval=args.poll_interval,
    )
    result = orchestrator.run(
        args.resource_group,
        args.location,
        args.deployment_name,
        args.template,
        parameters,
        resource_name=args.resource_name,
        resource_type=args.resource_type,
    )
    if result.get("deployment_submitted"):
        logger.info(f"Deployment {args.deployment_name} submitted.")
    else:
        logger.info(f"Deployment {args.deployment_name} already running, not resubmitted.")
    if args.resource_name and not result.get("provisioning_succeeded"):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
