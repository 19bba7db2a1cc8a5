"""
Template deployment submission.

A deployment is only submitted when no deployment with the same name is still
running in the resource group. The submission itself does not wait for the
deployment to finish; use the provisioning poller for that.
"""

import json
import logging
from typing import Any, Dict, Optional, Union
from components.errors import TemplateReadError
from components.provisioning_state import StatePhase, classify
from components.resource_group import ResourceGroupGuard
from components.resource_manager import ResourceManager

logger = logging.getLogger(__name__)

Parameters = Union[str, Dict[str, Any], None]


# --- Helper Functions ---

def _read_json_object(path: str) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise TemplateReadError(path, str(e)) from e
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise TemplateReadError(path, f"invalid JSON: {e}") from e
    if not isinstance(document, dict):
        raise TemplateReadError(path, "top-level value is not a JSON object")
    return document


def read_template(template_path: str) -> Dict[str, Any]:
    """Read and parse an ARM template file."""
    return _read_json_object(template_path)


def load_parameters_file(parameters_path: str) -> Dict[str, Any]:
    """Read a deployment parameters file and return its parameter values."""
    return normalize_parameters(_read_json_object(parameters_path), source=parameters_path)


def normalize_parameters(parameters: Parameters, source: str = "<parameters>") -> Dict[str, Any]:
    """
    Accept parameters as a mapping, a JSON string or a full parameters file
    document and return the {name: {"value": ...}} mapping ARM expects.

    None and the empty string mean no parameters.
    """
    if parameters is None:
        return {}
    if isinstance(parameters, str):
        if not parameters.strip():
            return {}
        try:
            parameters = json.loads(parameters)
        except json.JSONDecodeError as e:
            raise TemplateReadError(source, f"invalid parameters JSON: {e}") from e
        if not isinstance(parameters, dict):
            raise TemplateReadError(source, "parameters are not a JSON object")
    # Parameter files wrap the values in a "parameters" member next to "$schema"
    if "$schema" in parameters and isinstance(parameters.get("parameters"), dict):
        return dict(parameters["parameters"])
    return dict(parameters)


class DeploymentGuard:
    def __init__(self, resource_manager: ResourceManager, resource_group_guard: Optional[ResourceGroupGuard] = None):
        self.resource_manager = resource_manager
        self.resource_group_guard = resource_group_guard or ResourceGroupGuard(resource_manager)

    def deployment_running(self, resource_group_name: str, deployment_name: str) -> bool:
        """Return True if a deployment with this name exists and is still running."""
        if not self.resource_manager.deployment_exists(resource_group_name, deployment_name):
            return False

        deployment = self.resource_manager.get_deployment(resource_group_name, deployment_name)
        phase = classify(deployment.provisioning_state)
        logger.info(f"Deployment {deployment_name} is in state {deployment.provisioning_state!r}")
        if phase is StatePhase.UNKNOWN:
            logger.warning(
                f"Deployment {deployment_name} reports unrecognised provisioning state "
                f"{deployment.provisioning_state!r}, treating it as not running"
            )
        return phase is StatePhase.RUNNING

    def start_deployment(
        self,
        resource_group_name: str,
        location: str,
        deployment_name: str,
        template_path: str,
        parameters: Parameters = None,
    ) -> bool:
        """
        Submit an incremental deployment of the template unless one with the
        same name is already running.

        Args:
            resource_group_name: Target resource group, created if missing.
            location: Region used when the resource group has to be created.
            deployment_name: Name of the deployment.
            template_path: Path to the ARM template JSON file.
            parameters: Parameter values, see normalize_parameters().

        Returns:
            True if a deployment was submitted, False if one was already running.

        Raises:
            TemplateReadError: If the template or parameters cannot be parsed.
        """
        template = read_template(template_path)
        parameter_values = normalize_parameters(parameters)

        self.resource_group_guard.ensure_resource_group(resource_group_name, location)

        if self.deployment_running(resource_group_name, deployment_name):
            logger.info(f"Deployment {deployment_name} is still running, not resubmitting.")
            return False

        self.resource_manager.submit_deployment(
            resource_group_name,
            deployment_name,
            location,
            template,
            parameter_values,
        )
        logger.info(f"Deployment {deployment_name} submitted to resource group {resource_group_name}.")
        return True
