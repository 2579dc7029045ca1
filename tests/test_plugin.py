"""Tests for the pytest plugin."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytest import MonkeyPatch, Pytester

MENU_MODULE = '''
from types import SimpleNamespace

ACTIVATIONS = []

CONTEXT = SimpleNamespace(document={'links': ['home', 'about', '']})

FEATURES = [{
    'feature': 'Menu',
    'before': lambda window: ACTIVATIONS.append(window),
    'set': lambda document: document['links'],
    'tests': [{
        'scenario': 'Has a label',
        'getActual': lambda link, window: link,
        'comparison': lambda label: bool(label),
    }, {
        'scenario': 'Activated once',
        'getActual': lambda link, window: len(ACTIVATIONS),
        'comparison': lambda count: count == 1,
    }],
}]
'''

MALFORMED_MODULE = '''
FEATURES = [
    {'title': 'Not a node'},
    {
        'scenario': 'Kept',
        'getActual': lambda scope, context: scope,
        'comparison': lambda actual: actual is None,
    },
]
'''


def test_collect_and_run(pytester: 'Pytester') -> None:
    """Collect declared groups and run declared tests."""
    pytester.makepyfile(features_menu=MENU_MODULE)

    result = pytester.runpytest('-v')

    result.assert_outcomes(passed=5, failed=1)
    result.stdout.fnmatch_lines([
        '*features_menu.py::Menu::Set index: 0::Has a label PASSED*',
        '*features_menu.py::Menu::Set index: 2::Has a label FAILED*',
    ])
    result.stdout.fnmatch_lines(['*Comparison fail: Has a label*'])


def test_ignore_other_modules(pytester: 'Pytester') -> None:
    """Collect only modules matching the feature module pattern."""
    pytester.makepyfile(menu=MENU_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes()


def test_strict_collection_error(pytester: 'Pytester') -> None:
    """Report malformed nodes as a collection error."""
    pytester.makepyfile(features_malformed=MALFORMED_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes(errors=1)
    result.stdout.fnmatch_lines(['*Node must carry a "feature" or a "scenario" key*'])


def test_relaxed_collection(pytester: 'Pytester') -> None:
    """Skip malformed nodes when strict construction is disabled."""
    pytester.makepyfile(features_malformed=MALFORMED_MODULE)

    result = pytester.runpytest('--featuretree-relaxed')

    result.assert_outcomes(passed=1)


def test_relaxed_from_environment(pytester: 'Pytester', monkeypatch: 'MonkeyPatch') -> None:
    """Read settings from the environment."""
    monkeypatch.setenv('FEATURETREE_STRICT', 'false')
    pytester.makepyfile(features_malformed=MALFORMED_MODULE)

    result = pytester.runpytest()

    result.assert_outcomes(passed=1)
