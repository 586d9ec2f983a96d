"""
Object Printing

Renders arbitrary object graphs as deterministic nested text, configured
through an immutable fluent builder.
"""

from .config import PrinterSettings, load_settings, configure_logging

from .culture import NumberCulture, CULTURES, get_culture, format_number, truncate

from .descriptors import (
    FieldDescriptor,
    field_descriptor,
    register_descriptor,
    unregister_descriptor,
    describe,
    describe_type
)

from .engine import RenderEngine, LEAF_TYPES

from .errors import ObjectPrintingError, InvalidSelectorError

from .printing_config import PrintingConfig

from .type_config import TypePrintingConfig

from .printer import ObjectPrinter, print_to_string

__all__ = [
    # Configuration
    'PrinterSettings',
    'load_settings',
    'configure_logging',

    # Culture
    'NumberCulture',
    'CULTURES',
    'get_culture',
    'format_number',
    'truncate',

    # Descriptors
    'FieldDescriptor',
    'field_descriptor',
    'register_descriptor',
    'unregister_descriptor',
    'describe',
    'describe_type',

    # Rendering
    'RenderEngine',
    'LEAF_TYPES',
    'PrintingConfig',
    'TypePrintingConfig',
    'ObjectPrinter',
    'print_to_string',

    # Errors
    'ObjectPrintingError',
    'InvalidSelectorError'
]
