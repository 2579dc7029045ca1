"""Core type definitions for the feature tree runtime.

Scopes and contexts are opaque to the interpreter: they are produced
by rendering code and fragment-set generators and are only passed
through. The aliases below name the callable contracts a node may
carry.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from inspect import isawaitable
from typing import Any

#: Opaque object a leaf gathers its data from (a rendered fragment).
type Scope = Any

#: Opaque top-level object (a window or global) passed to every hook and leaf.
type Context = Any

#: Value produced by `getActual` and consumed by `comparison`.
type Actual = Any

#: Either a plain value or an awaitable resolving to it.
type MaybeAwaitable[T] = T | Awaitable[T]

#: Generates the ordered scopes a node fans out over.
type FragmentSet = Callable[[Scope], Sequence[Scope]]

#: Decides whether a leaf is registered at all.
type Given = Callable[[Scope, Context, int | None], bool]

#: Picks the scope a leaf or an inherited list runs against.
type FragmentGetter = Callable[[Any, Scope], Scope]

#: Gathers data from a scope.
type ActualGetter = Callable[[Scope, Context], MaybeAwaitable[Actual]]

#: Verifies gathered data; raises or returns `False` on failure.
type Comparison = Callable[[Actual], MaybeAwaitable[Any]]

#: Runs once per group activation.
type BeforeHook = Callable[[Context], MaybeAwaitable[None]]

#: Runs before every leaf of a group.
type BeforeEachHook = Callable[[Scope, Context], MaybeAwaitable[None]]

SEQUENCES = (list, tuple)


def is_sequence(value: Any) -> bool:  # noqa: ANN401
    """Check whether a value is an ordered node or scope sequence.

    Strings, bytes and mappings are not considered sequences.

    Args:
        value: Candidate value.

    Returns:
        True for lists, tuples and other non-text sequences.
    """
    if isinstance(value, SEQUENCES):
        return True

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, Mapping))


async def settle[T](value: MaybeAwaitable[T]) -> T:
    """Await a value when it is awaitable.

    Args:
        value: Plain value or awaitable.

    Returns:
        The value itself or the awaited result.
    """
    if isawaitable(value):
        return await value

    return value


def document_of(context: Any) -> Any:  # noqa: ANN401
    """Return the document a context exposes.

    A window-like context exposes it as the `document` attribute, a
    mapping context under the `document` key.

    Args:
        context: Candidate context.

    Returns:
        The document, or None if the context has none.
    """
    if isinstance(context, Mapping):
        return context.get('document')

    return getattr(context, 'document', None)
