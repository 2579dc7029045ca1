"""Display names of declared groups and tests.

The rules defined here are part of the public contract: fan-out groups
are always named after their zero-based position so that reports stay
stable across runs.
"""

from typing import Annotated

from pydantic import Field

#: Name template for groups produced by a fan-out.
SET_INDEX_TEMPLATE = 'Set index: {index}'


DisplayName = Annotated[
    str, Field(
        min_length=1,
        title='Display name',
        description=(
            'Name under which a feature group or a scenario test '
            'is declared to the test runner.'
        ),
        examples=[
            'Navigation menu',
            'Renders every link',
        ],
    ),
]


def set_index_name(index: int) -> str:
    """Return the name of the group declared for a fan-out position.

    Args:
        index: Zero-based position in the generated fragment set.

    Returns:
        Group display name.
    """
    return SET_INDEX_TEMPLATE.format(index=index)
