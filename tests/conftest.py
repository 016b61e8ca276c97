"""Shared fixtures for the DocTreeLib test suite."""

import pytest

from doctreelib.service import ContentRepositoryService
from doctreelib.testing import BufferedOutput, build_sample_site


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large trees, excluded by run_tests.py by default")


@pytest.fixture
def store():
    """Sample site with a live and a user-admin workspace."""
    return build_sample_site()


@pytest.fixture
def site_root(store):
    return store.get_node("/sites/demo")


@pytest.fixture
def service(store):
    service = ContentRepositoryService(store)
    service.setup()
    return service


@pytest.fixture
def output():
    return BufferedOutput()
