"""Tagged union of all node variants.

Plain mappings are classified by the keys they carry. A mapping that
carries neither `feature` nor `scenario` has no variant and fails
validation.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Union

from pydantic import Discriminator, Tag, TypeAdapter

from pytest_featuretree.models import SchemaModel

from .groups import FanOutGroup, PlainGroup
from .leaves import ConditionalLeaf, DirectLeaf, FanOutLeaf, InheritingLeaf

SET_KEYS = ('set', 'fragment_set')
INHERIT_KEYS = ('inherit',)
GIVEN_KEYS = ('given',)


def _carries(value: Mapping[str, Any], keys: tuple[str, ...]) -> bool:
    """Check whether any of the keys is present in a mapping."""
    return any(key in value for key in keys)


def node_kind(value: Any) -> str | None:  # noqa: ANN401, PLR0911
    """Return the variant tag of a node.

    Plain mappings are classified by key presence: a group fans out when
    it carries `set`; a scenario fans out on `set`, delegates on `inherit`
    and is conditional on `given`, in that order. Conflicting keys are
    then rejected by the chosen variant.

    Args:
        value: Node model instance or plain mapping.

    Returns:
        The variant tag or None if the value is not a node.
    """
    if isinstance(value, SchemaModel):
        return getattr(type(value), 'kind', None)

    if not isinstance(value, Mapping):
        return None

    if 'feature' in value:
        if _carries(value, SET_KEYS):
            return FanOutGroup.kind
        return PlainGroup.kind

    if 'scenario' in value:
        if _carries(value, SET_KEYS):
            return FanOutLeaf.kind
        if _carries(value, INHERIT_KEYS):
            return InheritingLeaf.kind
        if _carries(value, GIVEN_KEYS):
            return ConditionalLeaf.kind
        return DirectLeaf.kind

    return None


#: Any feature tree node.
type Node = Annotated[
    Union[  # noqa: UP007
        Annotated[FanOutGroup, Tag(FanOutGroup.kind)],
        Annotated[PlainGroup, Tag(PlainGroup.kind)],
        Annotated[FanOutLeaf, Tag(FanOutLeaf.kind)],
        Annotated[InheritingLeaf, Tag(InheritingLeaf.kind)],
        Annotated[ConditionalLeaf, Tag(ConditionalLeaf.kind)],
        Annotated[DirectLeaf, Tag(DirectLeaf.kind)],
    ],
    Discriminator(
        node_kind,
        custom_error_type='invalid_node',
        custom_error_message='Node must carry a "feature" or a "scenario" key',
    ),
]

#: Model classes by variant tag.
NODE_MODELS: dict[str, type[SchemaModel]] = {
    model.kind: model
    for model in (
        FanOutGroup,
        PlainGroup,
        FanOutLeaf,
        InheritingLeaf,
        ConditionalLeaf,
        DirectLeaf,
    )
}

for _model in NODE_MODELS.values():
    _model.model_rebuild()

#: Validator of root node sequences.
NODES_ADAPTER: TypeAdapter[list[Node]] = TypeAdapter(list[Node])
