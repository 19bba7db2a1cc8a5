"""
This module contains the deployment graph: submit the template deployment,
then wait for the target compute resource to finish provisioning.
"""

import logging
from typing import Any, Dict
from langgraph.graph import StateGraph, START, END
from components.deployment import DeploymentGuard
from components.poller import ProvisioningPoller
from state import DeploymentState

logger = logging.getLogger(__name__)


def build_deployment_graph(deployment_guard: DeploymentGuard, poller: ProvisioningPoller):
    """
    Build and compile the deployment graph.

    Exceptions raised by a node are not caught; they surface from invoke().
    """

    # --- Node 1: Start Deployment ---
    def start_deployment_node(state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Starting deployment {state['deployment_name']}")
        submitted = deployment_guard.start_deployment(
            state["resource_group_name"],
            state["location"],
            state["deployment_name"],
            state["template_path"],
            state.get("parameters"),
        )
        return {"deployment_submitted": submitted}

    # --- Node 2: Wait For Resource ---
    def wait_for_resource_node(state: Dict[str, Any]) -> Dict[str, Any]:
        succeeded = poller.wait_for_resource_provisioning(
            state["resource_group_name"],
            state["resource_name"],
            state["resource_type"],
        )
        return {"provisioning_succeeded": succeeded}

    graph = StateGraph(DeploymentState)
    graph.add_node("start_deployment", start_deployment_node)
    graph.add_node("wait_for_resource", wait_for_resource_node)

    graph.add_edge(START, "start_deployment")
    # Only wait when there is a resource to wait for
    graph.add_conditional_edges(
        "start_deployment",
        lambda state: "wait_for_resource" if state.get("resource_name") else END,
        {"wait_for_resource": "wait_for_resource", END: END}
    )
    graph.add_edge("wait_for_resource", END)
    return graph.compile()
