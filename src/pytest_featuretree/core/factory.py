"""Construction of typed nodes from plain node definitions.

Feature trees are usually written as nested lists of mappings. The
factory turns them into immutable node models before they are walked.

In strict mode (the default) every mapping must match exactly one node
variant; anything else raises `NodeSchemaError`. In relaxed mode nodes
are classified by shape, the way untyped trees have always been read:
unrecognised nodes are skipped, keys irrelevant to the chosen variant
are ignored, and conflicting modifiers are resolved by precedence.
Scenarios missing `getActual` or `comparison` still declare a test,
which fails when it runs.
"""

from collections.abc import Mapping
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING, Any, NoReturn
from warnings import warn

from pydantic import ValidationError

from pytest_featuretree.errors import NodeSchemaError, NodeWarning
from pytest_featuretree.models import SchemaModel
from pytest_featuretree.schema import (
    NODE_MODELS,
    NODES_ADAPTER,
    ConditionalLeaf,
    DirectLeaf,
    ExecutableMixin,
    FanOutGroup,
    FanOutLeaf,
    InheritingLeaf,
    PlainGroup,
)
from pytest_featuretree.values import is_sequence

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from pytest_featuretree.schema import Node

logger = getLogger(__name__)

CHILDREN_KEYS = ('tests', 'inherit')
NAME_KEYS = ('feature', 'scenario')

#: Callables every executable scenario needs, by attribute and input keys.
EXECUTABLE_KEYS = {
    'get_actual': ('getActual', 'get_actual'),
    'comparison': ('comparison',),
}

#: Optional callables are only used when they are callable.
OPTIONAL_CALLABLE_KEYS = frozenset({
    'before',
    'beforeEach',
    'before_each',
    'given',
    'getDomFragment',
    'get_dom_fragment',
})


def classify(item: Mapping[str, Any]) -> str | None:  # noqa: PLR0911
    """Classify a plain node by shape.

    Groups need a non-empty `feature`, leaves a non-empty `scenario`.
    Modifiers are recognised by value: `set` and `given` must be
    callable, `tests` and `inherit` must be sequences. The first match
    wins: fan-out, then inheritance, then condition.

    Args:
        item: Plain node mapping.

    Returns:
        The variant tag, or None for nodes to skip.
    """
    if item.get('feature'):
        if callable(item.get('set')):
            return FanOutGroup.kind
        if is_sequence(item.get('tests')):
            return PlainGroup.kind
        return None

    if item.get('scenario'):
        if callable(item.get('set')):
            return FanOutLeaf.kind
        if is_sequence(item.get('inherit')):
            return InheritingLeaf.kind
        if callable(item.get('given')):
            return ConditionalLeaf.kind
        return DirectLeaf.kind

    return None


class NodeFactory:
    """Builds typed nodes from plain node sequences.

    Attributes:
        strict: Reject invalid nodes instead of skipping them.
        filename: Name of the module the nodes come from, for error reports.
    """

    def __init__(self, *, strict: bool = True, filename: str | None = None) -> None:
        """Initialize the factory.

        Args:
            strict: Reject invalid nodes instead of skipping them.
            filename: Name of the module the nodes come from.
        """
        self.strict = strict
        self.filename = filename

    def build(self, nodes: Any) -> tuple['Node', ...]:  # noqa: ANN401
        """Build typed nodes.

        Args:
            nodes: Sequence of plain mappings and node models.

        Returns:
            Tuple of typed nodes. Empty if `nodes` is not a sequence.

        Raises:
            NodeSchemaError: If a node is invalid in strict mode.
        """
        if not is_sequence(nodes):
            return ()

        if self.strict:
            return self.validate(nodes)

        return tuple(self.relax(nodes))

    def validate(self, nodes: Any) -> tuple['Node', ...]:  # noqa: ANN401
        """Validate nodes against the node union.

        Args:
            nodes: Sequence of plain mappings and node models.

        Returns:
            Tuple of typed nodes.

        Raises:
            NodeSchemaError: If any node, at any depth, is invalid.
        """
        if all(isinstance(node, SchemaModel) for node in nodes):
            return tuple(nodes)

        try:
            return tuple(NODES_ADAPTER.validate_python(list(nodes)))
        except ValidationError as error:
            raise NodeSchemaError.from_pydantic_error(
                error,
                data=nodes,
                filename=self.filename,
            ) from error

    def relax(self, nodes: Any) -> 'Iterator[Node]':  # noqa: ANN401
        """Build nodes by shape, skipping anything unrecognised.

        Args:
            nodes: Sequence of plain mappings and node models.

        Yields:
            Typed nodes, in input order.
        """
        for position, item in enumerate(nodes):
            if isinstance(item, SchemaModel):
                yield item  # type: ignore[misc]
                continue

            if not isinstance(item, Mapping) or not (kind := classify(item)):
                logger.debug('Skipping node at position %d', position)
                continue

            if (node := self.relax_node(kind, item)) is not None:
                yield node

    def relax_node(self, kind: str, item: Mapping[str, Any]) -> 'Node | None':
        """Build a classified node from the keys its variant accepts.

        Names are converted to strings. An executable scenario without
        a callable `getActual` or `comparison` is kept: its test is
        declared and fails with `TypeError` when it runs.

        Args:
            kind: Variant tag returned by `classify`.
            item: Plain node mapping.

        Returns:
            Typed node, or None with a `NodeWarning` if the values
            of the accepted keys are still invalid.
        """
        model = NODE_MODELS[kind]
        accepted = model.input_keys()

        data = {
            key: value
            for key, value in item.items()
            if key in accepted
            and (key not in OPTIONAL_CALLABLE_KEYS or callable(value))
        }
        for key in NAME_KEYS:
            if key in data:
                data[key] = f'{data[key]}'
        for key in CHILDREN_KEYS:
            if key in data:
                data[key] = tuple(self.relax(data[key])) if is_sequence(data[key]) else ()

        if issubclass(model, ExecutableMixin):
            for field, keys in EXECUTABLE_KEYS.items():
                if any(callable(data.get(key)) for key in keys):
                    continue

                for key in keys:
                    data.pop(key, None)
                data[field] = partial(not_callable, keys[0])

                warn(
                    f'Scenario {data["scenario"]!r} has no callable {keys[0]!r}, '
                    'its test will fail',
                    category=NodeWarning,
                    stacklevel=3,
                )

        try:
            return model.model_validate(data)  # type: ignore[return-value]
        except ValidationError as error:
            name = item.get('feature') or item.get('scenario')
            warn(
                f'Skipping invalid node {name!r}: {error.error_count()} validation error(s)',
                category=NodeWarning,
                stacklevel=2,
            )

        return None


def not_callable(key: str, *args: Any) -> NoReturn:  # noqa: ARG001, ANN401
    """Fail a test whose scenario lacks a callable.

    Args:
        key: Input key of the missing callable.
        *args: Arguments the callable would have been called with.

    Raises:
        TypeError: Always.
    """
    raise TypeError(f'{key!r} is not callable')
