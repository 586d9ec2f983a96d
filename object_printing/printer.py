"""
Entry points for printing objects with a default or customised configuration.
"""

from typing import Any, Callable, Optional, Type, TypeVar

from .config import PrinterSettings
from .printing_config import PrintingConfig

T = TypeVar('T')


class ObjectPrinter:
    """Factory for default printing configurations."""

    @staticmethod
    def for_type(root_type: Type[T], settings: Optional[PrinterSettings] = None) -> PrintingConfig[T]:
        """Return an empty configuration for objects of ``root_type``."""
        return PrintingConfig(root_type, settings)


def print_to_string(obj: T,
                    configurer: Optional[Callable[[PrintingConfig[T]], PrintingConfig[T]]] = None,
                    settings: Optional[PrinterSettings] = None) -> str:
    """
    Render ``obj`` with the default configuration for its type.

    Args:
        obj: Object to render
        configurer: Optional function deriving a customised configuration
            from the default one
        settings: Layout and guard options

    Returns:
        The rendered text
    """
    config: PrintingConfig[Any] = ObjectPrinter.for_type(type(obj), settings)
    if configurer is not None:
        config = configurer(config)
    return config.print_to_string(obj)
