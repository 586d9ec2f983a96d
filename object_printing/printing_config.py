"""
Printing Configuration

``PrintingConfig`` is an immutable snapshot of everything that changes how an
object graph is printed: excluded types, excluded field paths, renderers per
runtime type and renderers per field path. Every builder method returns a new
configuration, so configurations derived from a common ancestor never see
each other's changes and can be shared freely between threads.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Generic, Mapping, Optional, Type, TypeVar, overload

from .config import PrinterSettings
from .engine import RenderEngine
from .selectors import FieldSelector, resolve_selector
from .type_config import TOwner, TypePrintingConfig

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Type for renderer functions
Renderer = Callable[[Any], str]


class PrintingConfig(Generic[TOwner]):
    """
    Immutable printing configuration for objects of type ``TOwner``.
    """

    __slots__ = (
        '_root_type',
        '_settings',
        '_excluded_types',
        '_excluded_paths',
        '_type_renderers',
        '_path_renderers',
    )

    def __init__(self,
                 root_type: Type[TOwner],
                 settings: Optional[PrinterSettings] = None,
                 *,
                 excluded_types: FrozenSet[Any] = frozenset(),
                 excluded_paths: FrozenSet[str] = frozenset(),
                 type_renderers: Optional[Mapping[type, Renderer]] = None,
                 path_renderers: Optional[Mapping[str, Renderer]] = None):
        """
        Initialize a printing configuration.

        Args:
            root_type: Type of the objects this configuration prints; field
                selectors are resolved against it
            settings: Layout and guard options (loaded from the environment
                when omitted)
            excluded_types: Declared field types left out of the output
            excluded_paths: Field paths left out of the output
            type_renderers: Renderers keyed by exact runtime type
            path_renderers: Renderers keyed by field path
        """
        _set = object.__setattr__
        _set(self, '_root_type', root_type)
        _set(self, '_settings', settings if settings is not None else PrinterSettings())
        _set(self, '_excluded_types', frozenset(excluded_types))
        _set(self, '_excluded_paths', frozenset(excluded_paths))
        _set(self, '_type_renderers', MappingProxyType(dict(type_renderers or {})))
        _set(self, '_path_renderers', MappingProxyType(dict(path_renderers or {})))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------ State ------

    @property
    def root_type(self) -> Type[TOwner]:
        return self._root_type

    @property
    def settings(self) -> PrinterSettings:
        return self._settings

    @property
    def excluded_types(self) -> FrozenSet[Any]:
        return self._excluded_types

    @property
    def excluded_paths(self) -> FrozenSet[str]:
        return self._excluded_paths

    @property
    def type_renderers(self) -> Mapping[type, Renderer]:
        return self._type_renderers

    @property
    def path_renderers(self) -> Mapping[str, Renderer]:
        return self._path_renderers

    def _evolve(self, **changes: Any) -> 'PrintingConfig[TOwner]':
        state = {
            'settings': self._settings,
            'excluded_types': self._excluded_types,
            'excluded_paths': self._excluded_paths,
            'type_renderers': self._type_renderers,
            'path_renderers': self._path_renderers,
        }
        state.update(changes)
        return PrintingConfig(self._root_type, **state)

    def with_excluded_type(self, excluded_type: Any) -> 'PrintingConfig[TOwner]':
        """Return a configuration that also leaves out fields declared as ``excluded_type``."""
        logger.debug(f"Excluding fields declared as {excluded_type!r}")
        return self._evolve(excluded_types=self._excluded_types | {excluded_type})

    def with_excluded_path(self, path: str) -> 'PrintingConfig[TOwner]':
        """Return a configuration that also leaves out the field at ``path``."""
        logger.debug(f"Excluding field path '{path}'")
        return self._evolve(excluded_paths=self._excluded_paths | {path})

    def with_type_renderer(self, rendered_type: type, renderer: Renderer) -> 'PrintingConfig[TOwner]':
        """
        Return a configuration rendering values of ``rendered_type`` with ``renderer``.

        Any renderer registered earlier for the same type is replaced.
        """
        if not callable(renderer):
            raise TypeError(f"renderer for {rendered_type!r} must be callable")
        renderers = dict(self._type_renderers)
        renderers[rendered_type] = renderer
        logger.debug(f"Registered renderer for type: {getattr(rendered_type, '__name__', rendered_type)}")
        return self._evolve(type_renderers=renderers)

    def with_path_renderer(self, path: str, renderer: Renderer) -> 'PrintingConfig[TOwner]':
        """
        Return a configuration rendering the field at ``path`` with ``renderer``.

        Any renderer registered earlier for the same path is replaced.
        """
        if not callable(renderer):
            raise TypeError(f"renderer for path '{path}' must be callable")
        renderers = dict(self._path_renderers)
        renderers[path] = renderer
        logger.debug(f"Registered renderer for field path: {path}")
        return self._evolve(path_renderers=renderers)

    def with_settings(self, settings: PrinterSettings) -> 'PrintingConfig[TOwner]':
        """Return a configuration using different layout and guard options."""
        return self._evolve(settings=settings)

    # ------ Fluent builder ------

    def exclude_type(self, excluded_type: Any) -> 'PrintingConfig[TOwner]':
        """Leave out every field whose declared type is ``excluded_type``."""
        return self.with_excluded_type(excluded_type)

    def exclude_field(self, selector: FieldSelector) -> 'PrintingConfig[TOwner]':
        """
        Leave out one field.

        Args:
            selector: Dotted field path or attribute-access function, e.g.
                ``lambda person: person.age``

        Raises:
            InvalidSelectorError: If the selector does not identify a declared
                field of the root type
        """
        return self.with_excluded_path(resolve_selector(self._root_type, selector))

    def configure_type(self, configured_type: Type[T]) -> TypePrintingConfig[T, TOwner]:
        """Start configuring how values of ``configured_type`` are rendered."""
        return TypePrintingConfig(
            lambda renderer: self.with_type_renderer(configured_type, renderer),
            scope=f"type {getattr(configured_type, '__name__', configured_type)}",
        )

    @overload
    def configure_field(self, selector: Callable[[TOwner], T]) -> TypePrintingConfig[T, TOwner]: ...

    @overload
    def configure_field(self, selector: str) -> TypePrintingConfig[Any, TOwner]: ...

    def configure_field(self, selector):
        """
        Start configuring how one field is rendered.

        The selector is resolved immediately.

        Args:
            selector: Dotted field path or attribute-access function

        Raises:
            InvalidSelectorError: If the selector does not identify a declared
                field of the root type
        """
        path = resolve_selector(self._root_type, selector)
        return TypePrintingConfig(
            lambda renderer: self.with_path_renderer(path, renderer),
            scope=f"field '{path}'",
        )

    # ------ Rendering ------

    def print_to_string(self, obj: TOwner) -> str:
        """Render ``obj`` as nested text."""
        return RenderEngine(self).render(obj)

    def __repr__(self) -> str:
        return (
            f"PrintingConfig({self._root_type.__name__}, "
            f"excluded_types={len(self._excluded_types)}, "
            f"excluded_paths={sorted(self._excluded_paths)}, "
            f"type_renderers={len(self._type_renderers)}, "
            f"path_renderers={sorted(self._path_renderers)})"
        )
