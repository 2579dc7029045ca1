"""Feature tree interpreter.

The primary public entry point is `TreeWalker`, which classifies nodes
and declares groups, hooks and tests through a runner. `LeafExecutor`
and `resolve_fragment` are its building blocks; `NodeFactory` builds
typed nodes from plain definitions.
"""

from .executor import LeafExecutor
from .factory import NodeFactory, classify
from .resolver import resolve_fragment
from .walker import TreeWalker

__all__ = (
    'LeafExecutor',
    'NodeFactory',
    'TreeWalker',
    'classify',
    'resolve_fragment',
)
