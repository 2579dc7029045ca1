"""Recursive interpreter of feature trees.

The walker turns a sequence of feature and scenario nodes into runner
declarations. Declaration is synchronous and depth-first: groups are
declared in input order, fan-out groups in generator order, and no
test body runs while walking.

The `(scope, context, index)` triple is passed explicitly to every
recursive call. Only the public `walk` entry point looks at the shape
of its scope argument, and only once.
"""

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from pytest_featuretree.names import set_index_name
from pytest_featuretree.schema import (
    ConditionalLeaf,
    DirectLeaf,
    FanOutGroup,
    FanOutLeaf,
    InheritingLeaf,
    PlainGroup,
)
from pytest_featuretree.values import document_of

from .executor import LeafExecutor
from .factory import NodeFactory
from .resolver import resolve_fragment

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Any

if TYPE_CHECKING:
    from pytest_featuretree.runners import Runner
    from pytest_featuretree.schema import BaseGroup, Node
    from pytest_featuretree.values import Context, Scope

logger = getLogger(__name__)


class TreeWalker:
    """Declares feature trees through a runner.

    Attributes:
        runner: Runner receiving group, hook and test declarations.
        factory: Factory building typed nodes from plain definitions.
        executor: Executor declaring the tests of executable scenarios.
    """

    def __init__(self, runner: 'Runner', *,
                 factory: NodeFactory | None = None,
                 executor: LeafExecutor | None = None) -> None:
        """Initialize the walker.

        Args:
            runner: Runner receiving declarations.
            factory: Node factory, strict by default.
            executor: Leaf executor, bound to `runner` by default.
        """
        self.runner = runner
        self.factory = factory or NodeFactory()
        self.executor = executor or LeafExecutor(runner)

    def walk(self, nodes: 'Any', scope: 'Scope',
             context: 'Context | None' = None,
             index: int | None = None) -> None:
        """Declare a node sequence.

        When no context is given and the scope exposes a truthy
        `document`, as an attribute or as a mapping key, the scope is
        taken as the context and its document as the scope.

        Args:
            nodes: Sequence of nodes. Anything else declares nothing.
            scope: Scope, or context exposing `document`.
            context: Global context.
            index: Enclosing fan-out index.

        Raises:
            NodeSchemaError: If a node is invalid in strict mode.
            Any exception raised by a fragment-set generator.
        """
        if context is None and (document := document_of(scope)):
            context, scope = scope, document

        self.walk_nodes(nodes, scope, context, index)

    def walk_context(self, nodes: 'Any', context: 'Context') -> None:
        """Declare a node sequence against the document of a context.

        Args:
            nodes: Sequence of nodes.
            context: Global context exposing `document`.
        """
        self.walk_nodes(nodes, document_of(context), context)

    def walk_scope(self, nodes: 'Any', scope: 'Scope',
                   context: 'Context | None' = None) -> None:
        """Declare a node sequence against a bare scope.

        Args:
            nodes: Sequence of nodes.
            scope: Root scope, used as is.
            context: Global context.
        """
        self.walk_nodes(nodes, scope, context)

    def walk_nodes(self, nodes: 'Any', scope: 'Scope', context: 'Context',
                   index: int | None = None) -> None:
        """Declare every node of a sequence, in order.

        Args:
            nodes: Sequence of nodes.
            scope: Current scope.
            context: Global context.
            index: Enclosing fan-out index.
        """
        for node in self.factory.build(nodes):
            self.walk_node(node, scope, context, index)

    def walk_node(self, node: 'Node', scope: 'Scope', context: 'Context',
                  index: int | None = None) -> None:
        """Dispatch a single node by variant.

        Args:
            node: Typed node.
            scope: Current scope.
            context: Global context.
            index: Enclosing fan-out index.
        """
        logger.debug('Walking %s %r', node.kind, node.name)

        match node:
            case FanOutGroup():
                fragments = tuple(node.fragment_set(scope))
                self.runner.declare_group(
                    node.feature,
                    partial(self.fan_out_group, node, fragments, scope, context),
                )

            case PlainGroup():
                self.runner.declare_group(
                    node.feature,
                    partial(self.plain_group, node, scope, context),
                )

            case FanOutLeaf():
                fragments = tuple(node.fragment_set(scope))
                for position, fragment in enumerate(fragments):
                    self.runner.declare_group(
                        set_index_name(position),
                        partial(self.fan_out_leaf, node, fragment, scope, context, index),
                    )

            case InheritingLeaf():
                self.runner.declare_group(
                    node.scenario,
                    partial(self.inheriting_leaf, node, scope, context),
                )

            case ConditionalLeaf():
                if node.given(scope, context, index):
                    self.executor.execute(node, resolve_fragment(node, scope), context)

            case DirectLeaf():
                self.executor.execute(node, resolve_fragment(node, scope), context)

    def declare_hooks(self, node: 'BaseGroup', scope: 'Scope', context: 'Context') -> None:
        """Declare the lifecycle hooks of a group.

        Args:
            node: Group node.
            scope: Scope the group was declared against.
            context: Global context.
        """
        if node.before is not None:
            self.runner.declare_hook('before', partial(node.before, context))

        if node.before_each is not None:
            self.runner.declare_hook('before_each', partial(node.before_each, scope, context))

    def fan_out_group(self, node: FanOutGroup, fragments: 'Sequence[Scope]',
                      scope: 'Scope', context: 'Context') -> None:
        """Declare the body of a fan-out group.

        Args:
            node: Group node.
            fragments: Scopes generated from `scope`.
            scope: Scope the group was declared against.
            context: Global context.
        """
        self.declare_hooks(node, scope, context)

        for position, fragment in enumerate(fragments):
            self.runner.declare_group(
                set_index_name(position),
                partial(self.walk_nodes, node.tests, fragment, context, position),
            )

    def plain_group(self, node: PlainGroup, scope: 'Scope', context: 'Context') -> None:
        """Declare the body of a plain group.

        Args:
            node: Group node.
            scope: Scope the group was declared against.
            context: Global context.
        """
        self.declare_hooks(node, scope, context)
        self.walk_nodes(node.tests, scope, context)

    def fan_out_leaf(self, node: FanOutLeaf, fragment: 'Scope', scope: 'Scope',
                     context: 'Context', index: int | None) -> None:
        """Declare the test of one fan-out position.

        The condition sees the enclosing scope and index, not the
        generated fragment.

        Args:
            node: Scenario node.
            fragment: Generated scope the test runs against.
            scope: Enclosing scope.
            context: Global context.
            index: Enclosing fan-out index.
        """
        if node.given is None or node.given(scope, context, index):
            self.executor.execute(node, fragment, context)

    def inheriting_leaf(self, node: InheritingLeaf, scope: 'Scope', context: 'Context') -> None:
        """Declare the inherited nodes of a scenario.

        Args:
            node: Scenario node.
            scope: Enclosing scope, before fragment resolution.
            context: Global context.
        """
        self.walk_nodes(node.inherit, resolve_fragment(node, scope), context)
