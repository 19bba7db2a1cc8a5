"""Shared pytest fixtures for all test modules."""

import json

import pytest

from components.models import DeploymentRecord, GenericResourceRecord


class FakeClock:
    """Clock whose sleep advances time instantly and records each call."""

    def __init__(self, start=0.0):
        self.current = start
        self.sleeps = []

    def now(self):
        return self.current

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.current += seconds


class FakeResourceManager:
    """In-memory ResourceManager that records every call.

    ``resource_existence`` and ``resource_states`` are consumed one value per
    call; the last value repeats once the list is exhausted.
    """

    def __init__(self):
        self.resource_groups = {}
        self.deployments = {}
        self.resource_existence = [True]
        self.resource_states = ["Succeeded"]
        self.resource_properties = None
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)

    @staticmethod
    def _next(values):
        return values.pop(0) if len(values) > 1 else values[0]

    def resource_group_exists(self, name):
        self._record("resource_group_exists", name)
        return name in self.resource_groups

    def create_resource_group(self, name, location):
        self._record("create_resource_group", name, location)
        self.resource_groups[name] = location

    def delete_resource_group(self, name):
        self._record("delete_resource_group", name)
        self.resource_groups.pop(name, None)

    def deployment_exists(self, resource_group_name, deployment_name):
        self._record("deployment_exists", resource_group_name, deployment_name)
        return (resource_group_name, deployment_name) in self.deployments

    def get_deployment(self, resource_group_name, deployment_name):
        self._record("get_deployment", resource_group_name, deployment_name)
        return DeploymentRecord(
            name=deployment_name,
            provisioning_state=self.deployments[(resource_group_name, deployment_name)],
        )

    def submit_deployment(self, resource_group_name, deployment_name, location, template, parameters, mode="Incremental"):
        self._record("submit_deployment", resource_group_name, deployment_name, location, template, parameters, mode)
        self.deployments[(resource_group_name, deployment_name)] = "Accepted"

    def generic_resource_exists(self, resource_group_name, provider_namespace, parent_path, resource_type, resource_name, api_version):
        self._record(
            "generic_resource_exists",
            resource_group_name, provider_namespace, parent_path, resource_type, resource_name, api_version,
        )
        return self._next(self.resource_existence)

    def get_generic_resource(self, resource_group_name, provider_namespace, parent_path, resource_type, resource_name, api_version):
        self._record(
            "get_generic_resource",
            resource_group_name, provider_namespace, parent_path, resource_type, resource_name, api_version,
        )
        if self.resource_properties is not None:
            properties = self.resource_properties
        else:
            properties = {"provisioningState": self._next(self.resource_states)}
        return GenericResourceRecord(name=resource_name, type=resource_type, properties=properties)


@pytest.fixture
def fake_rm():
    return FakeResourceManager()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def template_file(tmp_path):
    """Write a minimal ARM template and return its path."""
    template = {
        "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#",
        "contentVersion": "1.0.0.0",
        "parameters": {"vmName": {"type": "string"}},
        "resources": [],
    }
    path = tmp_path / "azuredeploy.json"
    path.write_text(json.dumps(template))
    return str(path)
