"""Tests for fragment resolution."""

from types import SimpleNamespace
from typing import TYPE_CHECKING

from pytest_featuretree.core import resolve_fragment
from pytest_featuretree.schema import DirectLeaf, InheritingLeaf

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def test_resolve_without_override(mocker: 'MockerFixture') -> None:
    """Return the enclosing scope when there is no override."""
    scope = object()
    node = DirectLeaf(scenario='S', get_actual=mocker.Mock(), comparison=mocker.Mock())

    assert resolve_fragment(node, scope) is scope


def test_resolve_with_override(mocker: 'MockerFixture') -> None:
    """Return the override result called with the node and scope."""
    get_dom_fragment = mocker.Mock(return_value='fragment')
    node = InheritingLeaf(scenario='S', inherit=(), get_dom_fragment=get_dom_fragment)

    assert resolve_fragment(node, 'scope') == 'fragment'
    get_dom_fragment.assert_called_once_with(node, 'scope')


def test_resolve_ignores_non_callable() -> None:
    """Ignore overrides that are not callable."""
    node = SimpleNamespace(get_dom_fragment='not callable')

    assert resolve_fragment(node, 'scope') == 'scope'


def test_resolve_nodes_without_attribute() -> None:
    """Accept nodes that cannot carry an override."""
    assert resolve_fragment(SimpleNamespace(), None) is None
