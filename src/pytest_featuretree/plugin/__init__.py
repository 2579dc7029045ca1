"""Pytest plugin for collecting and executing feature trees.

This module integrates feature modules with pytest by:
- registering custom command-line options;
- resolving shared `TreeSettings`;
- collecting feature modules as pytest files.

Python files matching the pattern `features_*.py` are collected; each
declared group becomes a pytest collector and each declared test a
pytest item.
"""

from re import match
from typing import TYPE_CHECKING

from .module import FeatureModule

if TYPE_CHECKING:
    from pathlib import Path

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.nodes import Node


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-featuretree.

    Args:
        parser: Pytest argument parser.
    """
    parser.addoption(
        '--featuretree-relaxed',
        action='store_true',
        dest='featuretree_relaxed',
        default=False,
        help=(
            'Disable strict node construction. '
            'Malformed nodes are skipped and nodes with conflicting '
            'modifiers are classified by precedence.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Configure pytest-featuretree integration.

    Resolves `TreeSettings` and attaches them to the pytest
    configuration object as `config.featuretree_settings`.

    Args:
        config: Pytest configuration object.
    """
    from pytest_featuretree.settings import TreeSettings  # noqa: PLC0415

    overrides = {}
    if config.getoption('--featuretree-relaxed', default=False):
        overrides['strict'] = False

    config.featuretree_settings = TreeSettings(**overrides)  # type: ignore[attr-defined]


def pytest_collect_file(parent: 'Node', file_path: 'Path') -> FeatureModule | None:
    """Collect feature modules.

    Args:
        parent: Parent pytest collection node.
        file_path: Path to the file being considered.

    Returns:
        A `FeatureModule` collector if the file name matches the
        configured pattern, otherwise ``None``.
    """
    settings = parent.config.featuretree_settings  # type: ignore[attr-defined]

    if match(settings.file_pattern, file_path.name):
        return FeatureModule.from_parent(
            parent,
            path=file_path,
        )

    return None
