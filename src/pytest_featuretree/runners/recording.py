"""In-memory runner recording a declaration tree.

Group bodies are called immediately, like `describe` blocks, so a walk
over a recording runner yields the complete tree of groups, hooks and
tests. Recorded tests are executed later, one coroutine per test, with
the hooks of every enclosing group applied outer first.
"""

from logging import getLogger
from typing import TYPE_CHECKING, Any

from pytest_featuretree.errors import HookError
from pytest_featuretree.values import settle

from .base import HOOK_KINDS

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from .base import GroupBody, HookBody, HookKind, TestBody

logger = getLogger(__name__)


class Declaration:
    """Named element of a declaration tree."""

    def __init__(self, name: str, parent: 'GroupDeclaration | None' = None) -> None:
        self.name = name
        self.parent = parent

    def ancestors(self) -> list['GroupDeclaration']:
        """Return enclosing groups, outermost first."""
        groups = []
        parent = self.parent
        while parent is not None:
            groups.append(parent)
            parent = parent.parent

        return groups[::-1]

    @property
    def path(self) -> tuple[str, ...]:
        """Names of the enclosing named groups and of this element."""
        return (
            *(group.name for group in self.ancestors() if group.name),
            self.name,
        )


class GroupDeclaration(Declaration):
    """Declared group with its hooks and ordered children.

    The root group of a runner is unnamed and may carry hooks too.
    """

    def __init__(self, name: str, parent: 'GroupDeclaration | None' = None) -> None:
        super().__init__(name, parent)

        self.hooks: dict[HookKind, list[HookBody]] = {kind: [] for kind in HOOK_KINDS}
        self.children: list[Declaration] = []

        self.activated = False
        self.failure: Exception | None = None

    async def activate(self) -> None:
        """Run `before` hooks unless the group was already activated.

        Raises:
            HookError: If a `before` hook of this group failed before.
        """
        if self.activated:
            if self.failure is not None:
                raise HookError(f'"before" hook of group {self.name!r} failed') from self.failure
            return

        self.activated = True
        try:
            for hook in self.hooks['before']:
                await settle(hook())
        except Exception as error:
            self.failure = error
            raise

    def tests(self) -> 'Iterator[TestDeclaration]':
        """Iterate over all tests of the group, depth-first."""
        for child in self.children:
            if isinstance(child, TestDeclaration):
                yield child
            elif isinstance(child, GroupDeclaration):
                yield from child.tests()

    def outline(self) -> list[Any]:
        """Describe the children as plain data.

        Returns:
            A list where tests are names and groups are single-key
            mappings from the group name to its outline.
        """
        return [
            {child.name: child.outline()} if isinstance(child, GroupDeclaration) else child.name
            for child in self.children
        ]


class TestDeclaration(Declaration):
    """Declared test with its asynchronous body."""

    __test__ = False

    def __init__(self, name: str, body: 'TestBody',
                 parent: GroupDeclaration | None = None) -> None:
        super().__init__(name, parent)

        self.body = body

    async def run(self) -> None:
        """Execute the test.

        Pending `before` hooks of enclosing groups run first, then every
        `before_each` hook of enclosing groups, outer groups first.

        Raises:
            Any exception raised by a hook or by the test body.
        """
        groups = self.ancestors()

        for group in groups:
            await group.activate()

        for group in groups:
            for hook in group.hooks['before_each']:
                await settle(hook())

        await settle(self.body())


class RecordingRunner:
    """Runner recording declarations into a `GroupDeclaration` tree."""

    def __init__(self) -> None:
        self.root = GroupDeclaration('')
        self.current = self.root

    def declare_group(self, name: str, body: 'GroupBody') -> None:
        """Declare a group and record everything its body declares.

        Args:
            name: Group display name.
            body: Callable declaring the group content.
        """
        group = GroupDeclaration(name, parent=self.current)
        self.current.children.append(group)

        logger.debug('Declaring group %r', group.path)

        self.current = group
        try:
            body()
        finally:
            self.current = group.parent or self.root

    def declare_hook(self, kind: 'HookKind', hook: 'HookBody') -> None:
        """Attach a lifecycle hook to the current group.

        Args:
            kind: Either `before` or `before_each`.
            hook: Hook callable without arguments.

        Raises:
            ValueError: If the hook kind is unknown.
        """
        if kind not in HOOK_KINDS:
            raise ValueError(f'Unknown hook kind {kind!r}')

        self.current.hooks[kind].append(hook)

    def declare_test(self, name: str, body: 'TestBody') -> None:
        """Record a test in the current group.

        Args:
            name: Test display name.
            body: Coroutine function executing the test.
        """
        test = TestDeclaration(name, body, parent=self.current)
        self.current.children.append(test)

        logger.debug('Declaring test %r', test.path)
