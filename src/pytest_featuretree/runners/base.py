"""Test runner capability set driven by the tree walker.

The walker only needs three primitives: declaring a named group whose
body declares more things, declaring a lifecycle hook in the current
group, and declaring a named test.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Literal, Protocol

#: Lifecycle hook kinds.
type HookKind = Literal['before', 'before_each']

#: Declares groups, hooks and tests when called.
type GroupBody = Callable[[], None]

#: Executes a hook; may return an awaitable.
type HookBody = Callable[[], Any]

#: Executes a test.
type TestBody = Callable[[], Awaitable[None]]

HOOK_KINDS: tuple[HookKind, ...] = ('before', 'before_each')


class Runner(Protocol):
    """Registration API of a test runner."""

    def declare_group(self, name: str, body: GroupBody) -> None:
        """Declare a named group and call its body synchronously."""
        ...  # pragma: no cover

    def declare_hook(self, kind: HookKind, hook: HookBody) -> None:
        """Declare a lifecycle hook in the current group."""
        ...  # pragma: no cover

    def declare_test(self, name: str, body: TestBody) -> None:
        """Declare a named test in the current group."""
        ...  # pragma: no cover
