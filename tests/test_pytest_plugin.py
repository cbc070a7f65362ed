"""Tests for the pytest plugin."""

import pytest

from doublekit.builder import MockBuilder
from tests.fixtures.components import Consumer, DependencyInterface


@pytest.mark.unit
def test_fixture_provides_builder(mock_builder):
    """Test the fixture yields a MockBuilder."""
    assert isinstance(mock_builder, MockBuilder)
    assert mock_builder.mocks == []


@pytest.mark.unit
def test_fixture_mocks_are_usable(mock_builder):
    """Test a mock built through the fixture satisfied within the test."""
    dependency = mock_builder.build(
        DependencyInterface,
        [{"method": "lookup", "invocation_count": 2, "args": [["isType", "str"]]}],
    )

    Consumer(dependency).resolve("a", "b")


PLUGIN_CONFTEST = 'pytest_plugins = ["doublekit.pytest_plugin"]\n'

UNMET_EXPECTATION_TEST = '''
from abc import ABC, abstractmethod


class Repository(ABC):
    @abstractmethod
    def save(self, item):
        pass


def test_save_is_called(mock_builder):
    mock_builder.build(Repository, [{"method": "save", "invocation_count": "once"}])
'''

MET_EXPECTATION_TEST = '''
from abc import ABC, abstractmethod


class Repository(ABC):
    @abstractmethod
    def save(self, item):
        pass


def test_save_is_called_once(mock_builder):
    repository = mock_builder.build(
        Repository, [{"method": "save", "invocation_count": "once"}]
    )
    repository.save("item")
'''


FAILING_CALL_TEST = '''
from abc import ABC, abstractmethod


class Repository(ABC):
    @abstractmethod
    def save(self, item):
        pass


def test_save_is_called_twice(mock_builder):
    repository = mock_builder.build(
        Repository, [{"method": "save", "invocation_count": "once"}]
    )
    repository.save("first")
    repository.save("second")
'''


@pytest.mark.slow
def test_unmet_expectation_fails_at_teardown(pytester):
    """Test unmet expectations are reported as teardown errors."""
    pytester.makeconftest(PLUGIN_CONFTEST)
    pytester.makepyfile(UNMET_EXPECTATION_TEST)

    result = pytester.runpytest_inprocess()

    result.assert_outcomes(passed=1, errors=1)
    result.stdout.fnmatch_lines(["*Expectation failed for method 'save'*"])


@pytest.mark.slow
def test_met_expectation_passes(pytester):
    """Test satisfied expectations leave the test green."""
    pytester.makeconftest(PLUGIN_CONFTEST)
    pytester.makepyfile(MET_EXPECTATION_TEST)

    result = pytester.runpytest_inprocess()

    result.assert_outcomes(passed=1)


@pytest.mark.slow
def test_failed_test_is_not_verified_again(pytester):
    """Test a failure inside the test is not repeated as a teardown error."""
    pytester.makeconftest(PLUGIN_CONFTEST)
    pytester.makepyfile(FAILING_CALL_TEST)

    result = pytester.runpytest_inprocess()

    result.assert_outcomes(failed=1, errors=0)
    result.stdout.fnmatch_lines(
        ["*save('second') was not expected to be called more than 1 time*"]
    )
