"""Shared fixtures for build notifier tests."""

import pytest

from build_notifier.config.models import PublisherConfig
from build_notifier.domain.models import BuildResult
from build_notifier.logging.context import clear_log_context

ENV_VARS = ["LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "NOTIFIER_SUBJECT_PREFIX"]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove notifier environment overrides and logging context around each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def config_dict():
    """A rule configuration covering every trigger category."""
    return {
        "users": [
            {"name": "always_user", "group": "always_group", "address": "always@example.com"},
            {"name": "change_user", "group": "change_group", "address": "change@example.com"},
            {"name": "failed_user", "group": "failed_group", "address": "failed@example.com"},
            {"name": "success_user", "group": "success_group", "address": "success@example.com"},
            {"name": "fixed_user", "group": "fixed_group", "address": "fixed@example.com"},
            {
                "name": "exception_user",
                "group": "exception_group",
                "address": "exception@example.com",
            },
            {"name": "orphan", "group": "missing_group", "address": "orphan@example.com"},
            {"name": "nogroup", "address": "nogroup@example.com"},
            {"name": "alice", "address": "alice@example.com"},
        ],
        "groups": [
            {"name": "always_group", "notification": "always"},
            {"name": "change_group", "notification": "change"},
            {"name": "failed_group", "notification": "failed"},
            {"name": "success_group", "notification": "success"},
            {"name": "fixed_group", "notification": "fixed"},
            {"name": "exception_group", "notification": "exception"},
        ],
    }


@pytest.fixture
def publisher_config(config_dict):
    """Validated configuration built from config_dict (no modifier categories)."""
    return PublisherConfig.model_validate(config_dict)


@pytest.fixture
def build_properties():
    """Typical build properties used in subject templates."""
    return {"CCNetProject": "Foo", "CCNetLabel": "42"}


@pytest.fixture
def success_result(build_properties):
    """Successful build following a successful build."""
    return BuildResult(
        status="success",
        previous_status="success",
        properties=build_properties,
    )


@pytest.fixture
def fixed_result(build_properties):
    """Successful build following a failed build."""
    return BuildResult(
        status="success",
        previous_status="failure",
        fixed=True,
        properties=build_properties,
    )


@pytest.fixture
def broken_result(build_properties):
    """Failed build following a successful build."""
    return BuildResult(
        status="failure",
        previous_status="success",
        contributors=["alice"],
        properties=build_properties,
    )


@pytest.fixture
def still_broken_result(build_properties):
    """Failed build following a failed build."""
    return BuildResult(
        status="failure",
        previous_status="failure",
        contributors=["alice"],
        failure_contributors=["bob"],
        properties=build_properties,
    )


@pytest.fixture
def exception_result(build_properties):
    """Build that raised an exception after a failed build."""
    return BuildResult(
        status="exception",
        previous_status="failure",
        properties=build_properties,
    )
