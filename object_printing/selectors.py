"""
Field Selectors

Resolves a field selector into a field path of a root type. A selector is
either a dotted string (``"parent.name"``) or a function made of attribute
accesses only (``lambda person: person.parent.name``).
"""

import collections.abc
import logging
import typing
from typing import Any, Callable, List, Tuple, Union

from .descriptors import describe_type, unwrap_optional
from .errors import InvalidSelectorError

logger = logging.getLogger(__name__)

FieldSelector = Union[str, Callable[[Any], Any]]


class _FieldRecorder:
    """Stand-in for the root object that records the attributes read from it."""

    __slots__ = ('_selector_chain',)

    def __init__(self, chain: Tuple[str, ...] = ()):
        self._selector_chain = chain

    def __getattr__(self, name: str) -> '_FieldRecorder':
        if name.startswith('__'):
            raise AttributeError(name)
        return _FieldRecorder(self._selector_chain + (name,))


def _traversal_type(declared_type: Any) -> Any:
    """Type whose fields the next selector segment names; containers yield their item type."""
    declared_type = unwrap_optional(declared_type)
    origin = typing.get_origin(declared_type)
    args = typing.get_args(declared_type)
    if isinstance(origin, type) and args and not issubclass(origin, (str, bytes)):
        if issubclass(origin, collections.abc.Mapping):
            return unwrap_optional(args[-1])
        if issubclass(origin, (collections.abc.Sequence, collections.abc.Set)):
            return unwrap_optional(args[0])
    return declared_type


def _chain_from_string(selector: str) -> List[str]:
    segments = selector.split('.')
    if not all(segment.strip() == segment and segment for segment in segments):
        raise InvalidSelectorError(selector, "path segments must be non-empty field names")
    return segments


def _chain_from_callable(selector: Callable[[Any], Any]) -> List[str]:
    try:
        recorded = selector(_FieldRecorder())
    except Exception as e:
        raise InvalidSelectorError(selector, f"selector must only access attributes ({e})") from e

    if not isinstance(recorded, _FieldRecorder):
        raise InvalidSelectorError(selector, "selector must return a field of its argument")
    if not recorded._selector_chain:
        raise InvalidSelectorError(selector, "selector returns the root object, not a field")
    return list(recorded._selector_chain)


def resolve_selector(root_type: type, selector: FieldSelector) -> str:
    """
    Resolve a selector to the dotted path of a declared field.

    Args:
        root_type: Type the selector is applied to
        selector: Dotted string or attribute-access function

    Returns:
        The field path, e.g. ``"parent.name"``

    Raises:
        InvalidSelectorError: If the selector is malformed or any segment does
            not name a declared field of the type reached so far
    """
    if isinstance(selector, str):
        chain = _chain_from_string(selector)
    elif callable(selector):
        chain = _chain_from_callable(selector)
    else:
        raise InvalidSelectorError(selector, "expected a dotted field path or an attribute-access function")

    current: Any = root_type
    for name in chain:
        owner_name = getattr(current, '__name__', repr(current))
        fields = describe_type(current) if isinstance(current, type) else None
        if fields is None:
            raise InvalidSelectorError(selector, f"{owner_name} declares no fields")

        matches = [f for f in fields if f.name == name]
        if len(matches) != 1:
            raise InvalidSelectorError(selector, f"{owner_name} has no field '{name}'")

        current = _traversal_type(matches[0].declared_type)

    path = '.'.join(chain)
    logger.debug(f"Resolved selector for {root_type.__name__} to path '{path}'")
    return path
