"""Registration and execution of executable scenarios."""

from functools import partial
from typing import TYPE_CHECKING

from pytest_featuretree.values import settle

if TYPE_CHECKING:
    from pytest_featuretree.runners import Runner
    from pytest_featuretree.schema import ConditionalLeaf, DirectLeaf, FanOutLeaf
    from pytest_featuretree.values import Context, Scope

type ExecutableLeaf = DirectLeaf | ConditionalLeaf | FanOutLeaf


class LeafExecutor:
    """Registers one runner test per executed scenario.

    The test body gathers data from the resolved scope with the node's
    `get_actual` and hands the settled result to its `comparison`.
    Exceptions from either callable reach the runner unchanged.
    """

    def __init__(self, runner: 'Runner') -> None:
        """Initialize the executor.

        Args:
            runner: Runner receiving test declarations.
        """
        self.runner = runner

    def execute(self, node: ExecutableLeaf, scope: 'Scope', context: 'Context') -> None:
        """Declare the test of a scenario.

        Args:
            node: Executable scenario.
            scope: Fully resolved scope the scenario reads from.
            context: Global context passed to `get_actual`.
        """
        self.runner.declare_test(
            node.scenario,
            partial(self.run, node, scope, context),
        )

    @staticmethod
    async def run(node: ExecutableLeaf, scope: 'Scope', context: 'Context') -> None:
        """Gather the data and verify it.

        Args:
            node: Executable scenario.
            scope: Scope passed to `get_actual`.
            context: Context passed to `get_actual`.

        Raises:
            AssertionError: If the comparison returns `False`.
            Any exception raised by `get_actual` or `comparison`.
        """
        actual = await settle(node.get_actual(scope, context))
        outcome = await settle(node.comparison(actual))

        if outcome is False:
            raise AssertionError(f'Comparison fail: {node.scenario}')
