"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report invalid feature trees, unloadable feature modules and failed
lifecycle hooks in a structured way.

Errors raised by `getActual` and `comparison` callables are never wrapped:
they belong to the test that raised them and reach the runner verbatim.
"""

from collections.abc import Mapping
from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

from pytest_featuretree.models import SchemaModel
from pytest_featuretree.values import SEQUENCES, is_sequence

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails, ValidationError

SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unknown module>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)


def mask_runtime_objects(value: Any) -> Any:  # noqa: ANN401
    """Make a node printable.

    Node definitions mostly hold callables and scopes, which YAML can
    not show. Those are replaced with a placeholder, and built nodes
    are shown by their fields.

    Args:
        value: Plain node, node model or any nested value.

    Returns:
        A YAML-safe copy of the value.
    """
    if value is None or isinstance(value, SCALARS):
        return value

    if isinstance(value, SchemaModel):
        value = dict(value)

    if isinstance(value, Mapping):
        return {f'{key}': mask_runtime_objects(item) for key, item in value.items()}

    if is_sequence(value):
        return [mask_runtime_objects(item) for item in value]

    return FORMAT_REPLACER


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the feature module where the error occurred.
    filename: str | None

    #: Location of the node within the tree, as mapping keys and positions.
    path: tuple[int | str, ...] | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Tree element associated with the error.
    element: Any


class ErrorFormatter:
    """Formats tree errors with the module, the node path and the node.

    The output is the message followed by indented lines such as::

        in "features_menu.py"
        at node $[0].tests[1]
         ...
          scenario: Renders links
          getActual: <runtime object>
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            The message alone without context, otherwise the message,
            the location lines and the snippet lines, each terminated
            by a line separator.
        """
        if not context:
            return message

        return linesep.join((
            message,
            *cls.location_lines(context),
            *cls.snippet_lines(context),
            '',
        ))

    @staticmethod
    def location_lines(context: ErrorContext) -> list[str]:
        """Describe where the failing node comes from."""
        padding = ' ' * FORMAT_INDENT
        lines = [f'{padding}in "{context.get("filename") or FORMAT_FILENAME}"']

        if path := context.get('path'):
            lines.append(f'{padding}at node {ErrorFormatter.format_path(path)}')

        return lines

    @staticmethod
    def format_path(path: tuple[int | str, ...]) -> str:
        """Render a node location as a JSONPath-like string.

        Args:
            path: Sequence of mapping keys and list positions.

        Returns:
            Location string such as ``$[0].tests[1]``.
        """
        return '$' + ''.join(
            f'[{key}]' if isinstance(key, int) else f'.{key}'
            for key in path
        )

    @staticmethod
    def snippet_lines(context: ErrorContext) -> list[str]:
        """Show the failing node as YAML, runtime objects masked.

        Args:
            context: Error context containing the element.

        Returns:
            Indented snippet lines, or no lines without an element.
        """
        if (element := context.get('element')) is None:
            return []

        padding = ' ' * FORMAT_INDENT * 2
        text = dump(
            mask_runtime_objects(element),
            indent=SNIPPET_INDENT,
            allow_unicode=True,
            sort_keys=False,
        )

        return [
            f'{padding} ...',
            *(f'{padding}{line}' for line in text.splitlines() if line.strip()),
        ]


class NodeWarning(UserWarning):
    """Warning emitted by relaxed construction for suspicious nodes.

    Scenarios without a callable `getActual` or `comparison` are kept
    with a test that fails, and nodes whose values are still invalid
    are dropped. Nodes that cannot be classified at all are skipped
    silently.
    """


class TreeError(Exception, ErrorFormatter):
    """Base exception for all pytest-featuretree errors."""

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context with location and element data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class FeatureModuleError(TreeError):
    """Error raised when a feature module cannot be loaded.

    The module may fail to import, or lack the attribute holding
    the root node sequence.
    """


class HookError(TreeError):
    """Error raised for tests of a group whose `before` hook failed."""


class NodeSchemaError(TreeError):
    """Error raised when a node does not match any node variant.

    Strict construction raises this error for nodes without a
    discriminator key, with empty names, unknown keys, missing
    callables, or conflicting modifiers.
    """

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None,  # noqa: ANN401
                            filename: str | None = None) -> 'Self':
        """Create a schema error from a Pydantic validation failure.

        The first error that can be traced back into the input data
        determines the message, the node path and the snippet.

        Args:
            error: ValidationError raised by Pydantic.
            data: The validated node sequence.
            filename: Name of the feature module the nodes come from.

        Returns:
            NodeSchemaError representing the validation failure.
        """
        error_context = ErrorContext(
            filename=filename,
            error=error,
        )

        if not data or not isinstance(data, SEQUENCES):
            return cls('Node sequence validation error', context=error_context)

        for item in error.errors(include_url=False, include_input=False):
            if located := cls._locate_pydantic_context(data, item):
                message, path, value = located
                return cls(message, context=ErrorContext({
                    **error_context,
                    'path': path,
                    'element': value,
                }))

        return cls('Node validation error', context=error_context)

    @classmethod
    def _locate_pydantic_context(cls, value: Any,  # noqa: ANN401
                                 error: 'ErrorDetails',
                                 ) -> tuple[str, tuple[int | str, ...], Any] | None:
        """Locate the most specific failing node in validated data.

        Walks the Pydantic error location. Segments that are not
        present in the data (such as union tags) are skipped.

        Args:
            value: Root node sequence being validated.
            error: Pydantic error details including location path.

        Returns:
            A tuple of (error message, node path, failing node) or None
            if no message is available.
        """
        node = value
        path: list[int | str] = []
        node_path: tuple[int | str, ...] = ()
        last_item = value

        for key in error['loc']:
            if isinstance(last_item, SEQUENCES):
                if isinstance(key, int) and 0 <= key < len(last_item):
                    last_item = last_item[key]
                    path.append(key)
            elif isinstance(last_item, Mapping):
                if key in last_item:
                    last_item = last_item[key]
                    path.append(key)
            else:
                break

            if isinstance(last_item, Mapping):
                node = last_item
                node_path = tuple(path)

        message = None
        for item in (error.get('msg') or '').splitlines():
            if item_message := item.strip():
                message = item_message
                break

        if not message:
            return None

        # union tags are hyphenated, field keys never are
        if (field := error['loc'][-1] if error['loc'] else None) and \
                isinstance(field, str) and '-' not in field:
            message = f'{message}: {field!r}'

        return message, node_path, node
