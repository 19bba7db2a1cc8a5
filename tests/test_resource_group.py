"""Unit tests for the resource group guard."""

import pytest

from components.resource_group import ResourceGroupGuard


class CreateFailed(Exception):
    pass


def test_ensure_creates_missing_group(fake_rm):
    guard = ResourceGroupGuard(fake_rm)
    assert guard.ensure_resource_group("rg1", "West US") is True
    assert fake_rm.resource_groups == {"rg1": "West US"}
    assert fake_rm.calls[-1] == ("create_resource_group", ("rg1", "West US"))


def test_ensure_twice_creates_once(fake_rm):
    guard = ResourceGroupGuard(fake_rm)
    results = (
        guard.ensure_resource_group("rg1", "West US"),
        guard.ensure_resource_group("rg1", "West US"),
    )
    assert results == (True, False)
    assert fake_rm.count("create_resource_group") == 1


def test_ensure_existing_group_performs_no_write(fake_rm):
    fake_rm.resource_groups["rg1"] = "East US"
    guard = ResourceGroupGuard(fake_rm)
    assert guard.ensure_resource_group("rg1", "West US") is False
    assert fake_rm.count("create_resource_group") == 0
    assert fake_rm.resource_groups["rg1"] == "East US"


def test_create_failure_propagates(fake_rm):
    def fail(name, location):
        raise CreateFailed("quota")

    fake_rm.create_resource_group = fail
    guard = ResourceGroupGuard(fake_rm)
    with pytest.raises(CreateFailed):
        guard.ensure_resource_group("rg1", "West US")


def test_group_created_between_check_and_create(fake_rm):
    """The check-then-create window is not closed: the create call is still issued."""
    original_exists = fake_rm.resource_group_exists

    def exists_then_race(name):
        result = original_exists(name)
        fake_rm.resource_groups[name] = "West US"
        return result

    fake_rm.resource_group_exists = exists_then_race
    guard = ResourceGroupGuard(fake_rm)
    assert guard.ensure_resource_group("rg1", "West US") is True
    assert fake_rm.count("create_resource_group") == 1


# ── delete_resource_group ────────────────────────────────────────


def test_delete_existing_group(fake_rm):
    fake_rm.resource_groups["rg1"] = "West US"
    guard = ResourceGroupGuard(fake_rm)
    assert guard.delete_resource_group("rg1") is True
    assert "rg1" not in fake_rm.resource_groups
    assert fake_rm.count("delete_resource_group") == 1


def test_delete_missing_group_is_noop(fake_rm):
    guard = ResourceGroupGuard(fake_rm)
    assert guard.delete_resource_group("rg1") is False
    assert fake_rm.count("delete_resource_group") == 0
