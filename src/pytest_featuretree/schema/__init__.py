"""Immutable models describing feature tree nodes.

Groups (`feature` nodes) contain other nodes; leaves (`scenario` nodes)
are executable tests or delegations to inherited test lists. Every
combination of optional behaviors is a separate variant of the `Node`
union.
"""

from .groups import BaseGroup, FanOutGroup, PlainGroup
from .leaves import (
    BaseLeaf,
    ConditionalLeaf,
    DirectLeaf,
    ExecutableMixin,
    FanOutLeaf,
    InheritingLeaf,
)
from .nodes import NODE_MODELS, NODES_ADAPTER, Node, node_kind

__all__ = (
    'NODES_ADAPTER',
    'NODE_MODELS',
    'BaseGroup',
    'BaseLeaf',
    'ConditionalLeaf',
    'DirectLeaf',
    'ExecutableMixin',
    'FanOutGroup',
    'FanOutLeaf',
    'InheritingLeaf',
    'Node',
    'PlainGroup',
    'node_kind',
)
