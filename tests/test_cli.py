"""Tests for the command-line utilities."""

from typing import TYPE_CHECKING

from click.testing import CliRunner
from yaml import safe_load

from pytest_featuretree.__main__ import cli

if TYPE_CHECKING:
    from pathlib import Path

VALID_MODULE = '''\
SCOPE = {'items': ['one', 'two']}

FEATURES = [{
    'feature': 'List',
    'tests': [{
        'scenario': 'Item',
        'set': lambda scope: scope['items'],
        'getActual': lambda item, context: item,
        'comparison': lambda item: item in ('one', 'two'),
    }],
}]
'''

BROKEN_SET_MODULE = '''\
FEATURES = [{
    'feature': 'List',
    'set': lambda scope: scope['items'],
    'tests': [],
}]
'''

MALFORMED_MODULE = '''\
FEATURES = [
    {'title': 'Not a node'},
    {'scenario': 'Kept', 'getActual': print, 'comparison': print},
]
'''


def test_show(tmp_path: 'Path') -> None:
    """Print the declaration tree as YAML."""
    path = tmp_path / 'features_list.py'
    path.write_text(VALID_MODULE, encoding='utf-8')

    result = CliRunner().invoke(cli, ['show', f'{path}'])

    assert result.exit_code == 0, result.output
    assert safe_load(result.output) == [{'List': [
        {'Set index: 0': ['Item']},
        {'Set index: 1': ['Item']},
    ]}]


def test_check(tmp_path: 'Path') -> None:
    """Report the number of declared tests."""
    path = tmp_path / 'features_list.py'
    path.write_text(VALID_MODULE, encoding='utf-8')

    result = CliRunner().invoke(cli, ['check', f'{path}'])

    assert result.exit_code == 0, result.output
    assert result.output == 'OK: 2 test(s) declared\n'


def test_check_malformed(tmp_path: 'Path') -> None:
    """Fail on malformed nodes unless relaxed."""
    path = tmp_path / 'features_malformed.py'
    path.write_text(MALFORMED_MODULE, encoding='utf-8')

    result = CliRunner().invoke(cli, ['check', f'{path}'])

    assert result.exit_code == 1
    assert 'Node must carry a "feature" or a "scenario" key' in result.output
    assert 'at node $[0]' in result.output

    result = CliRunner().invoke(cli, ['check', '--relaxed', f'{path}'])

    assert result.exit_code == 0, result.output
    assert result.output == 'OK: 1 test(s) declared\n'


def test_check_missing_module(tmp_path: 'Path') -> None:
    """Reject paths that do not exist."""
    result = CliRunner().invoke(cli, ['check', f'{tmp_path / "features_none.py"}'])

    assert result.exit_code == 2


def test_check_failing_generator(tmp_path: 'Path') -> None:
    """Report fragment-set failures without a traceback."""
    path = tmp_path / 'features_broken.py'
    path.write_text(BROKEN_SET_MODULE, encoding='utf-8')

    result = CliRunner().invoke(cli, ['check', f'{path}'])

    assert result.exit_code == 1
    assert 'Can not walk feature module: TypeError' in result.output
    assert 'Traceback' not in result.output
