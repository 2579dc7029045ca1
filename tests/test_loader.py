"""Tests for feature module loading."""

from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from pytest_featuretree.errors import FeatureModuleError, NodeSchemaError
from pytest_featuretree.loader import FeatureModuleLoader, FeatureSource
from pytest_featuretree.settings import TreeSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pytest_featuretree.runners import TestDeclaration

MENU_MODULE = '''
from types import SimpleNamespace

CONTEXT = SimpleNamespace(document={'links': ['home', 'about']})

FEATURES = [{
    'feature': 'Menu',
    'set': lambda document: document['links'],
    'tests': [{
        'scenario': 'Has a label',
        'getActual': lambda link, window: link,
        'comparison': lambda label: bool(label),
    }],
}]
'''


@pytest.fixture
def write_module(tmp_path: 'Path') -> 'Callable[[str, str], Path]':
    """Provide a helper writing a feature module to a temporary directory."""
    def write(name: str, source: str) -> 'Path':
        path = tmp_path / name
        path.write_text(dedent(source), encoding='utf-8')
        return path

    return write


def test_declare_module(write_module: 'Callable[[str, str], Path]',
                        execute: 'Callable[[TestDeclaration], None]') -> None:
    """Walk a module against the document of its context."""
    path = write_module('features_menu.py', MENU_MODULE)

    root = FeatureModuleLoader().declare(path)

    assert root.outline() == [{'Menu': [
        {'Set index: 0': ['Has a label']},
        {'Set index: 1': ['Has a label']},
    ]}]

    for test in root.tests():
        execute(test)


def test_declare_module_factories(write_module: 'Callable[[str, str], Path]') -> None:
    """Call module attributes that are factories."""
    path = write_module('features_factory.py', '''
        def SCOPE():
            return {'title': 'Home'}

        def FEATURES():
            return [{
                'scenario': 'Title',
                'getActual': lambda scope, context: scope['title'],
                'comparison': lambda title: title == 'Home',
            }]
    ''')

    source = FeatureModuleLoader().load(path)

    assert source.scope == {'title': 'Home'}
    assert source.context is None
    assert source.filename == f'{path}'
    assert source.declare().outline() == ['Title']


def test_load_custom_attributes(write_module: 'Callable[[str, str], Path]') -> None:
    """Read the attribute names configured in the settings."""
    path = write_module('features_custom.py', '''
        TREE = [{'feature': 'Empty', 'tests': []}]
    ''')

    settings = TreeSettings(features_attribute='TREE')

    assert FeatureModuleLoader(settings).declare(path).outline() == [{'Empty': []}]


def test_load_without_features(write_module: 'Callable[[str, str], Path]') -> None:
    """Reject modules without a root node sequence."""
    path = write_module('features_empty.py', 'SCOPE = None\n')

    with pytest.raises(FeatureModuleError, match="does not define 'FEATURES'"):
        FeatureModuleLoader().load(path)


def test_load_broken_module(write_module: 'Callable[[str, str], Path]') -> None:
    """Wrap import failures."""
    path = write_module('features_broken.py', 'raise RuntimeError("no renderer")\n')

    with pytest.raises(FeatureModuleError, match='Can not import feature module') as raised:
        FeatureModuleLoader().load(path)

    assert isinstance(raised.value.__cause__, RuntimeError)


def test_declare_strict_and_relaxed(write_module: 'Callable[[str, str], Path]') -> None:
    """Reject malformed nodes unless strict construction is disabled."""
    path = write_module('features_malformed.py', '''
        FEATURES = [
            {'title': 'Not a node'},
            {'feature': 'Kept', 'tests': []},
        ]
    ''')

    with pytest.raises(NodeSchemaError, match='features_malformed.py'):
        FeatureModuleLoader().declare(path)

    relaxed = FeatureModuleLoader(TreeSettings(strict=False))

    assert relaxed.declare(path).outline() == [{'Kept': []}]


def test_source_prefers_scope() -> None:
    """Use an explicit scope even when a context is defined."""
    source = FeatureSource(
        [{'scenario': 'S', 'getActual': lambda scope, context: scope,
          'comparison': lambda actual: actual == 'scope'}],
        scope='scope',
        context=object(),
    )

    (test,) = source.declare().tests()

    assert test.path == ('S',)


def test_load_keeps_callable_objects(write_module: 'Callable[[str, str], Path]') -> None:
    """Call only functions, not classes or callable objects."""
    path = write_module('features_objects.py', '''
        class Window:
            document = {'title': 'Home'}

            def __call__(self):
                raise AssertionError('called')

        CONTEXT = Window()

        class SCOPE:
            title = 'Home'

        FEATURES = lambda: []
    ''')

    source = FeatureModuleLoader().load(path)

    assert source.nodes == []
    assert source.context.document == {'title': 'Home'}
    assert isinstance(source.scope, type)


def test_load_failing_factory(write_module: 'Callable[[str, str], Path]') -> None:
    """Wrap failures of attribute factories."""
    path = write_module('features_factory.py', '''
        def FEATURES():
            raise LookupError('no menu')
    ''')

    with pytest.raises(FeatureModuleError, match="Can not build 'FEATURES'") as raised:
        FeatureModuleLoader().load(path)

    assert isinstance(raised.value.__cause__, LookupError)
    assert 'features_factory.py' in f'{raised.value}'


def test_declare_mapping_context(write_module: 'Callable[[str, str], Path]',
                                 execute: 'Callable[[TestDeclaration], None]') -> None:
    """Walk a module against the document of a mapping context."""
    path = write_module('features_mapping.py', '''
        CONTEXT = {'document': {'title': 'Home'}}

        FEATURES = [{
            'scenario': 'Title',
            'getActual': lambda document, context: document['title'],
            'comparison': lambda title: title == 'Home',
        }]
    ''')

    (test,) = FeatureModuleLoader().declare(path).tests()
    execute(test)
