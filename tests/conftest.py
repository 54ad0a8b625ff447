import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config overlay before any domain is initialised, and keep
    audit entries in memory so tests can assert on them.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("AUDIT_SINK", "memory")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Fixture to drop adapter singletons after every test"""
    yield

    from catalogue.listing import reset_listing_store
    from notifications.channel import reset_channels
    from ordering.audit import reset_audit_sink

    reset_listing_store()
    reset_channels()
    reset_audit_sink()
