"""Pytest nodes mirroring a recorded declaration tree.

Declared groups become collectors and declared tests become items.
Lifecycle hooks stay attached to the recorded groups and are applied
when an item runs.
"""

from asyncio import run
from typing import TYPE_CHECKING

import pytest

from pytest_featuretree.runners import GroupDeclaration, TestDeclaration

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any


def collect_declarations(parent: pytest.Collector,
                         group: GroupDeclaration) -> 'Iterable[FeatureGroup | FeatureCase]':
    """Create pytest nodes for the children of a declared group.

    Args:
        parent: Pytest collector owning the nodes.
        group: Declared group.

    Yields:
        A `FeatureGroup` per child group and a `FeatureCase` per child test.
    """
    for child in group.children:
        if isinstance(child, GroupDeclaration):
            yield FeatureGroup.from_parent(
                parent,
                name=child.name,
                declaration=child,
            )
        elif isinstance(child, TestDeclaration):
            yield FeatureCase.from_parent(
                parent,
                name=child.name,
                declaration=child,
            )


class FeatureGroup(pytest.Collector):
    """Pytest collector for a declared group."""

    __test__ = False

    def __init__(self, *, declaration: GroupDeclaration, **kwargs: 'Any') -> None:
        """Initialize a collector backed by a declared group.

        Args:
            declaration: Declared group.
            **kwargs: Keyword pytest.Collector arguments.
        """
        super().__init__(**kwargs)

        self.declaration = declaration

    def collect(self) -> 'Iterable[FeatureGroup | FeatureCase]':
        """Collect the children of the group."""
        yield from collect_declarations(self, self.declaration)


class FeatureCase(pytest.Item):
    """Pytest item executing a declared test.

    Pending `before` hooks and all `before_each` hooks of enclosing
    groups run first, in the same event loop as the test body.
    """

    __test__ = False

    def __init__(self, *, declaration: TestDeclaration, **kwargs: 'Any') -> None:
        """Initialize an item backed by a declared test.

        Args:
            declaration: Declared test.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.declaration = declaration

    def runtest(self) -> None:
        """Execute the declared test."""
        run(self.declaration.run())

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Report location as the feature module and the group path."""
        return self.path, None, ' > '.join(self.declaration.path)
