"""CLI utilities for inspecting feature modules.

Feature modules are walked exactly as the pytest plugin walks them,
without running any test.
"""

from pathlib import Path

from click import ClickException, argument, echo, group, option
from click import Path as PathParam
from yaml import safe_dump

from pytest_featuretree.errors import TreeError
from pytest_featuretree.loader import FeatureModuleLoader
from pytest_featuretree.runners import GroupDeclaration
from pytest_featuretree.settings import TreeSettings

ModuleFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)

relaxed_option = option(
    '--relaxed',
    is_flag=True,
    default=False,
    help='Skip malformed nodes instead of rejecting them.',
)


def _declare(module: Path, relaxed: bool) -> GroupDeclaration:
    """Walk a feature module.

    Args:
        module: Path to the feature module.
        relaxed: Disable strict node construction.

    Returns:
        Root of the declaration tree.

    Raises:
        ClickException: If the module or its tree is invalid, or if
            a fragment-set generator fails while walking.
    """
    settings = TreeSettings(strict=False) if relaxed else TreeSettings()

    try:
        return FeatureModuleLoader(settings).declare(module)
    except TreeError as error:
        raise ClickException(f'{error}') from error
    except Exception as error:
        raise ClickException(f'Can not walk feature module: {error!r}') from error


@group(help='Command-line utilities for pytest-featuretree.')
def cli() -> None:
    """Root CLI group for pytest-featuretree tools."""
    return None


@cli.command(
    name='show',
    help='Print the groups and tests declared by a feature module as YAML.',
)
@relaxed_option
@argument('module', type=ModuleFilepath)
def show_tree(module: Path, relaxed: bool) -> None:
    """Print the declaration tree of a feature module."""
    root = _declare(module, relaxed)

    echo(safe_dump(
        root.outline(),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    ), nl=False)


@cli.command(
    name='check',
    help='Validate a feature module and report the number of declared tests.',
)
@relaxed_option
@argument('module', type=ModuleFilepath)
def check_module(module: Path, relaxed: bool) -> None:
    """Validate a feature module."""
    root = _declare(module, relaxed)

    echo(f'OK: {sum(1 for _ in root.tests())} test(s) declared')


if __name__ == '__main__':
    cli()
