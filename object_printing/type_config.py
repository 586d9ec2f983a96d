"""
Scoped printing configuration.

``PrintingConfig.configure_type`` and ``PrintingConfig.configure_field`` hand
out a ``TypePrintingConfig`` bound to one type or field. Setting a serializer
on it installs the serializer and returns the next ``PrintingConfig`` in the
chain.

Some helpers only make sense for particular value types: ``set_culture`` is
declared for ``int`` and ``float`` scopes and ``shrink_to_length`` for ``str``
scopes. Both narrow ``self``, so a type checker rejects them on any other
scope.
"""

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, overload

from .culture import CultureLike, format_number, get_culture, truncate

if TYPE_CHECKING:
    from .printing_config import PrintingConfig

logger = logging.getLogger(__name__)

T = TypeVar('T')
TOwner = TypeVar('TOwner')

# Installs an untyped renderer and returns the resulting configuration
InstallFunction = Callable[[Callable[[Any], str]], 'PrintingConfig[Any]']


class TypePrintingConfig(Generic[T, TOwner]):
    """
    Builder scoped to values of type ``T`` inside a ``PrintingConfig[TOwner]``.
    """

    __slots__ = ('_install', '_scope')

    def __init__(self, install: InstallFunction, scope: str):
        """
        Initialize the scoped builder.

        Args:
            install: Function that registers a renderer and returns the new
                configuration
            scope: Human readable description of the scope, used in logs
        """
        self._install = install
        self._scope = scope

    @property
    def scope(self) -> str:
        """Description of the type or field this builder configures."""
        return self._scope

    def set_serializer(self, serializer: Callable[[T], str]) -> 'PrintingConfig[TOwner]':
        """
        Render every value in this scope with ``serializer``.

        A serializer set earlier for the same scope is replaced.

        Args:
            serializer: Function from a value of type ``T`` to its text

        Returns:
            The new printing configuration
        """
        @functools.wraps(serializer)
        def render(value: Any) -> str:
            return serializer(value)

        logger.debug(f"Setting serializer for {self._scope}")
        return self._install(render)

    @overload
    def set_culture(self: 'TypePrintingConfig[int, TOwner]', culture: CultureLike) -> 'PrintingConfig[TOwner]': ...

    @overload
    def set_culture(self: 'TypePrintingConfig[float, TOwner]', culture: CultureLike) -> 'PrintingConfig[TOwner]': ...

    def set_culture(self, culture):
        """
        Format the numbers in this scope with the separators of ``culture``.

        Args:
            culture: A ``NumberCulture`` or the name of a built-in culture

        Returns:
            The new printing configuration

        Raises:
            KeyError: If ``culture`` names no built-in culture
        """
        resolved = get_culture(culture)
        logger.debug(f"Setting culture {resolved.name} for {self._scope}")
        return self._install(lambda value: format_number(value, resolved))

    def shrink_to_length(self: 'TypePrintingConfig[str, TOwner]', length: int) -> 'PrintingConfig[TOwner]':
        """
        Cut the strings in this scope down to at most ``length`` characters.

        Raises:
            ValueError: If ``length`` is negative
        """
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        logger.debug(f"Shrinking {self._scope} to {length} characters")
        return self._install(lambda value: truncate(value, length))

    def __repr__(self) -> str:
        return f"TypePrintingConfig({self._scope})"
