"""Feature group node definitions.

A feature group is a named container of child nodes. It may run
lifecycle hooks and may replicate its children once per scope produced
by a fragment-set generator.
"""

from typing import ClassVar

from pydantic import AliasChoices, Field

from pytest_featuretree.models import SchemaModel
from pytest_featuretree.names import DisplayName  # noqa: TC001
from pytest_featuretree.values import BeforeEachHook, BeforeHook, FragmentSet  # noqa: TC001


class BaseGroup(SchemaModel):
    """Common fields of feature group nodes."""

    feature: DisplayName

    before: BeforeHook | None = Field(
        default=None,
        title='Before hook',
        description=(
            'Called with the context once per group activation, '
            'before any test of the group runs.'
        ),
    )

    before_each: BeforeEachHook | None = Field(
        default=None,
        validation_alias=AliasChoices('beforeEach', 'before_each'),
        title='Before-each hook',
        description=(
            'Called with the group scope and the context before every '
            'test of the group, including tests of nested groups.'
        ),
    )

    @property
    def name(self) -> str:
        """Display name of the group."""
        return self.feature


class PlainGroup(BaseGroup):
    """Group whose children run against the enclosing scope."""

    kind: ClassVar[str] = 'plain-group'

    tests: tuple['Node', ...] = Field(
        title='Child nodes',
        description='Ordered groups and scenarios declared inside the group.',
    )


class FanOutGroup(BaseGroup):
    """Group replicated once per generated scope.

    Every generated scope gets a nested group named after its position,
    and the children are declared inside it against that scope.
    """

    kind: ClassVar[str] = 'fan-out-group'

    fragment_set: FragmentSet = Field(
        validation_alias=AliasChoices('set', 'fragment_set'),
        title='Fragment set',
        description=(
            'Called with the enclosing scope, returns the ordered '
            'scopes the children are declared against.'
        ),
    )

    tests: tuple['Node', ...] = Field(
        default=(),
        title='Child nodes',
        description='Ordered groups and scenarios declared for every scope.',
    )
