"""Pytest integration for feature modules.

A feature module is imported, its tree is walked through a recording
runner, and the recorded declarations are mirrored as pytest nodes.
"""

from typing import TYPE_CHECKING

import pytest

from pytest_featuretree.loader import FeatureModuleLoader

from .case import collect_declarations

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from .case import FeatureCase, FeatureGroup


class FeatureModule(pytest.File):
    """Pytest file collector for feature modules."""

    __test__ = False

    def collect(self) -> 'Iterable[FeatureGroup | FeatureCase]':
        """Collect groups and tests declared by a feature module.

        Returns:
            Iterable of root-level `FeatureGroup` and `FeatureCase` nodes.

        Raises:
            FeatureModuleError: If the module cannot be loaded.
            NodeSchemaError: If a node is invalid in strict mode.
        """
        loader = FeatureModuleLoader(self.config.featuretree_settings)  # type: ignore[attr-defined]
        root = loader.declare(self.path)

        yield from collect_declarations(self, root)
