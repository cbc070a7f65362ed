"""
pytest integration for doublekit.

Enable it from a conftest.py:

    pytest_plugins = ["doublekit.pytest_plugin"]

and request the ``mock_builder`` fixture. Mocks built through the fixture are
verified when the test finishes, so unmet expectations fail the test. When the
test body already failed, verification is skipped so the original failure is
the only one reported.
"""

import logging
from typing import Dict, Generator

import pytest

from doublekit.builder import MockBuilder

logger = logging.getLogger(__name__)

phase_report_key = pytest.StashKey[Dict[str, pytest.TestReport]]()


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item for fixtures to inspect."""
    outcome = yield
    report = outcome.get_result()
    item.stash.setdefault(phase_report_key, {})[report.when] = report


def _call_failed(request) -> bool:
    reports = request.node.stash.get(phase_report_key, {})
    report = reports.get("call")
    return report is not None and report.failed


@pytest.fixture
def mock_builder(request) -> Generator[MockBuilder, None, None]:
    """
    Provide a MockBuilder whose mocks are verified at teardown.

    Example:
        def test_consumer_forwards(mock_builder):
            dependency = mock_builder.build(
                DependencyInterface, [{"method": "handle", "invocation_count": "once"}]
            )
            Consumer(dependency).forward("text")
    """
    builder = MockBuilder()
    yield builder
    if _call_failed(request):
        logger.debug(f"Skipping verification for failed test {request.node.nodeid}")
        return
    builder.verify_all()
