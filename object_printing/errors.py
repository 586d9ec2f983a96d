"""
Object Printing Errors

Exceptions raised while building a printing configuration.
"""


class ObjectPrintingError(Exception):
    """Base class for all object printing errors."""


class InvalidSelectorError(ObjectPrintingError, ValueError):
    """
    Raised when a field selector does not identify exactly one declared
    field chain of the configuration's root type.
    """

    def __init__(self, selector, reason: str):
        self.selector = selector
        self.reason = reason
        super().__init__(f"Invalid field selector {selector!r}: {reason}")
