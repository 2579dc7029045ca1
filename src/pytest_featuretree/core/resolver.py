"""Fragment resolution for scenarios."""

from typing import Any

from pytest_featuretree.values import Scope  # noqa: TC001


def resolve_fragment(node: Any, scope: Scope) -> Scope:  # noqa: ANN401
    """Return the scope a scenario runs against.

    Nodes may override the enclosing scope with a `get_dom_fragment`
    callable, for example to select a child component before running
    inherited tests.

    Args:
        node: Scenario node.
        scope: Enclosing scope.

    Returns:
        The scope produced by the node override, or `scope` itself.
    """
    getter = getattr(node, 'get_dom_fragment', None)
    if callable(getter):
        return getter(node, scope)

    return scope
