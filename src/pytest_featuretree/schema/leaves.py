"""Scenario leaf node definitions.

A scenario is either a directly executable test (data gathering plus
verification) or a delegation to another node's list of tests. Each
combination of modifiers is a separate model so that a node can carry
only the callables its variant actually uses.
"""

from typing import ClassVar

from pydantic import AliasChoices, Field

from pytest_featuretree.models import SchemaModel
from pytest_featuretree.names import DisplayName  # noqa: TC001
from pytest_featuretree.values import (  # noqa: TC001
    ActualGetter,
    Comparison,
    FragmentGetter,
    FragmentSet,
    Given,
)


class BaseLeaf(SchemaModel):
    """Common fields of scenario nodes."""

    scenario: DisplayName

    @property
    def name(self) -> str:
        """Display name of the scenario."""
        return self.scenario


class ExecutableMixin(SchemaModel):
    """Data gathering and verification callables of a test."""

    get_actual: ActualGetter = Field(
        validation_alias=AliasChoices('getActual', 'get_actual'),
        title='Data getter',
        description=(
            'Called with the scope and the context, returns (or resolves '
            'to) the data points read from the scope.'
        ),
    )

    comparison: Comparison = Field(
        title='Comparison',
        description=(
            'Called with the gathered data. Raising, or returning `False`, '
            'fails the test.'
        ),
    )


class FragmentMixin(SchemaModel):
    """Optional override of the scope a scenario runs against."""

    get_dom_fragment: FragmentGetter | None = Field(
        default=None,
        validation_alias=AliasChoices('getDomFragment', 'get_dom_fragment'),
        title='Fragment getter',
        description=(
            'Called with the node and the enclosing scope, returns '
            'the scope to use instead.'
        ),
    )


class DirectLeaf(FragmentMixin, ExecutableMixin, BaseLeaf):
    """Scenario registered as a single test."""

    kind: ClassVar[str] = 'direct-leaf'


class ConditionalLeaf(FragmentMixin, ExecutableMixin, BaseLeaf):
    """Scenario registered only when its condition holds."""

    kind: ClassVar[str] = 'conditional-leaf'

    given: Given = Field(
        title='Condition',
        description=(
            'Called with the scope, the context and the enclosing fan-out '
            'index. The scenario is not registered when it returns false.'
        ),
    )


class FanOutLeaf(ExecutableMixin, BaseLeaf):
    """Scenario registered once per generated scope."""

    kind: ClassVar[str] = 'fan-out-leaf'

    fragment_set: FragmentSet = Field(
        validation_alias=AliasChoices('set', 'fragment_set'),
        title='Fragment set',
        description=(
            'Called with the enclosing scope, returns the ordered '
            'scopes the test is registered against.'
        ),
    )

    given: Given | None = Field(
        default=None,
        title='Condition',
        description=(
            'Called with the enclosing scope, the context and the enclosing '
            'fan-out index inside every generated group.'
        ),
    )


class InheritingLeaf(FragmentMixin, BaseLeaf):
    """Scenario delegating to the tests of another node."""

    kind: ClassVar[str] = 'inheriting-leaf'

    inherit: tuple['Node', ...] = Field(
        title='Inherited nodes',
        description=(
            'Tests reused from another component, declared inside '
            'a group named after the scenario.'
        ),
    )
