"""Loading and declaring feature modules.

A feature module is a Python file defining the root node sequence and
the object the tree runs against:

- `FEATURES` - root nodes, or a function returning them;
- `CONTEXT` - a context exposing `document`, or a function returning it;
- `SCOPE` - a bare scope, or a function returning it.

Attribute names are configurable with `TreeSettings`.
"""

from importlib.util import module_from_spec, spec_from_file_location
from inspect import isfunction
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pytest_featuretree.core import NodeFactory, TreeWalker
from pytest_featuretree.errors import ErrorContext, FeatureModuleError
from pytest_featuretree.runners import GroupDeclaration, RecordingRunner
from pytest_featuretree.settings import TreeSettings

if TYPE_CHECKING:
    from pathlib import Path
    from types import ModuleType

logger = getLogger(__name__)

MISSING = object()


class FeatureSource:
    """Root nodes of a feature module and the objects they run against."""

    def __init__(self, nodes: Any, *,  # noqa: ANN401
                 scope: Any = None,  # noqa: ANN401
                 context: Any = None,  # noqa: ANN401
                 filename: str | None = None) -> None:
        """Initialize a feature source.

        Args:
            nodes: Root node sequence.
            scope: Root scope, if the module defines one.
            context: Global context, if the module defines one.
            filename: Module file name.
        """
        self.nodes = nodes
        self.scope = scope
        self.context = context
        self.filename = filename

    def declare(self, *, strict: bool = True) -> GroupDeclaration:
        """Walk the nodes through a recording runner.

        A module defining a context and no scope runs against the
        context document; otherwise the scope is used as is.

        Args:
            strict: Reject invalid nodes instead of skipping them.

        Returns:
            The root of the recorded declaration tree.

        Raises:
            NodeSchemaError: If a node is invalid in strict mode.
            Any exception raised by a fragment-set generator.
        """
        runner = RecordingRunner()
        walker = TreeWalker(
            runner,
            factory=NodeFactory(strict=strict, filename=self.filename),
        )

        if self.context is not None and self.scope is None:
            walker.walk_context(self.nodes, self.context)
        else:
            walker.walk_scope(self.nodes, self.scope, self.context)

        return runner.root


class FeatureModuleLoader:
    """Imports feature modules according to the settings."""

    def __init__(self, settings: TreeSettings | None = None) -> None:
        """Initialize the loader.

        Args:
            settings: Loader settings; resolved from the environment if omitted.
        """
        self.settings = settings or TreeSettings()

    def load(self, path: 'Path') -> FeatureSource:
        """Import a feature module and read its attributes.

        Args:
            path: Path to the feature module.

        Returns:
            Feature source of the module.

        Raises:
            FeatureModuleError: If the module cannot be imported, does
                not define the features attribute, or a factory fails.
        """
        module = self.import_module(path)

        nodes = self.read_attribute(module, self.settings.features_attribute)
        if nodes is MISSING:
            raise FeatureModuleError(
                f'Feature module does not define {self.settings.features_attribute!r}',
                context=ErrorContext(filename=f'{path}'),
            )

        source = FeatureSource(
            nodes,
            scope=self.read_attribute(module, self.settings.scope_attribute, None),
            context=self.read_attribute(module, self.settings.context_attribute, None),
            filename=f'{path}',
        )

        logger.debug('Loaded feature module %s', path)

        return source

    def declare(self, path: 'Path') -> GroupDeclaration:
        """Import a feature module and record its declaration tree.

        Args:
            path: Path to the feature module.

        Returns:
            The root of the recorded declaration tree.
        """
        return self.load(path).declare(strict=self.settings.strict)

    @staticmethod
    def import_module(path: 'Path') -> 'ModuleType':
        """Import a Python file as a standalone module.

        Args:
            path: Path to the Python file.

        Returns:
            The executed module.

        Raises:
            FeatureModuleError: If the file cannot be imported.
        """
        spec = spec_from_file_location(f'featuretree.{path.stem}', path)
        if spec is None or spec.loader is None:
            raise FeatureModuleError(
                'Can not import feature module',
                context=ErrorContext(filename=f'{path}'),
            )

        module = module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as error:
            raise FeatureModuleError(
                f'Can not import feature module: {error!r}',
                context=ErrorContext(filename=f'{path}', error=error),
            ) from error

        return module

    @staticmethod
    def read_attribute(module: 'ModuleType', name: str,
                       default: Any = MISSING) -> Any:  # noqa: ANN401
        """Read a module attribute, calling it when it is a function.

        Only plain functions (including lambdas) are factories. Classes
        and callable objects are returned as they are.

        Args:
            module: Feature module.
            name: Attribute name.
            default: Value returned when the attribute is missing.

        Returns:
            The attribute value, or the result of calling it.

        Raises:
            FeatureModuleError: If the factory function fails.
        """
        value = getattr(module, name, default)
        if not isfunction(value):
            return value

        try:
            return value()
        except Exception as error:
            raise FeatureModuleError(
                f'Can not build {name!r}: {error!r}',
                context=ErrorContext(filename=module.__file__, error=error),
            ) from error
