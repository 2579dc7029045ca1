"""Tests configurations and fixtures."""

from asyncio import run
from types import SimpleNamespace
from typing import TYPE_CHECKING

import pytest

from pytest_featuretree.core import NodeFactory, TreeWalker
from pytest_featuretree.runners import RecordingRunner

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_featuretree.runners import TestDeclaration


@pytest.fixture
def runner() -> RecordingRunner:
    """Provide an empty recording runner."""
    return RecordingRunner()


@pytest.fixture
def walker(runner: RecordingRunner) -> TreeWalker:
    """Provide a strict walker declaring into `runner`."""
    return TreeWalker(runner)


@pytest.fixture
def relaxed_walker(runner: RecordingRunner) -> TreeWalker:
    """Provide a relaxed walker declaring into `runner`."""
    return TreeWalker(runner, factory=NodeFactory(strict=False))


@pytest.fixture
def window() -> SimpleNamespace:
    """Provide a context exposing a document scope."""
    return SimpleNamespace(document={'name': 'document'})


@pytest.fixture
def execute() -> 'Callable[[TestDeclaration], None]':
    """Provide a helper running a recorded test to completion.

    Returns:
        A callable running a declared test, with its hooks, in a
        fresh event loop.
    """
    def execute_test(test: 'TestDeclaration') -> None:
        run(test.run())

    return execute_test
