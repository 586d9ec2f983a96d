"""
Structural Descriptors

Turns a composite value into an ordered list of ``(name, declared_type,
accessor)`` triples. Dataclasses, pydantic models, named tuples, annotated
classes and plain objects are understood out of the box; any other type can
be described explicitly with ``register_descriptor``.
"""

import dataclasses
import functools
import logging
import operator
import threading
import typing
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class FieldDescriptor(NamedTuple):
    """One declared field of a composite type."""
    name: str
    declared_type: Any
    accessor: Callable[[Any], Any]


def field_descriptor(name: str, declared_type: Any, accessor: Optional[Callable[[Any], Any]] = None) -> FieldDescriptor:
    """Build a descriptor, reading the attribute called ``name`` by default."""
    return FieldDescriptor(name, declared_type, accessor or operator.attrgetter(name))


def _optional_attribute(name: str) -> Callable[[Any], Any]:
    # Annotated attributes the instance never assigned read as None
    return lambda obj: getattr(obj, name, None)


# Explicitly registered descriptors, keyed by type
_registered: Dict[type, Tuple[FieldDescriptor, ...]] = {}
_registry_lock = threading.Lock()


def register_descriptor(cls: type, fields: Iterable[FieldDescriptor]) -> None:
    """
    Register the field list used for ``cls`` and its subclasses.

    Registering a type twice replaces the earlier field list.

    Args:
        cls: Type being described
        fields: Descriptors in rendering order
    """
    with _registry_lock:
        _registered[cls] = tuple(fields)
        _introspect.cache_clear()
    logger.debug(f"Registered structural descriptor for {cls.__name__} ({len(_registered[cls])} fields)")


def unregister_descriptor(cls: type) -> None:
    """Remove an explicit registration, falling back to introspection."""
    with _registry_lock:
        _registered.pop(cls, None)
        _introspect.cache_clear()


def unwrap_optional(declared_type: Any) -> Any:
    """Return ``X`` for ``Optional[X]``; any other type is returned unchanged."""
    if typing.get_origin(declared_type) is Union:
        args = [arg for arg in typing.get_args(declared_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return declared_type


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        # Unresolvable forward references: keep the raw annotations
        logger.debug(f"Falling back to raw annotations for {cls.__name__}: {e}")
        hints: Dict[str, Any] = {}
        for base in reversed(cls.__mro__):
            hints.update(getattr(base, '__annotations__', {}))
        return hints


def _is_class_var(hint: Any) -> bool:
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    return isinstance(hint, str) and hint.startswith(('ClassVar', 'typing.ClassVar'))


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, '_fields')


@functools.lru_cache(maxsize=None)
def _introspect(cls: type) -> Optional[Tuple[FieldDescriptor, ...]]:
    for base in cls.__mro__:
        if base in _registered:
            return _registered[base]

    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        return tuple(
            field_descriptor(f.name, hints.get(f.name, f.type))
            for f in dataclasses.fields(cls)
        )

    if issubclass(cls, BaseModel):
        return tuple(
            field_descriptor(name, info.annotation)
            for name, info in cls.model_fields.items()
        )

    if _is_named_tuple(cls):
        hints = _type_hints(cls)
        return tuple(field_descriptor(name, hints.get(name, Any)) for name in cls._fields)

    hints = {
        name: hint for name, hint in _type_hints(cls).items()
        if not name.startswith('_') and not _is_class_var(hint)
    }
    if hints:
        return tuple(
            field_descriptor(name, hint, _optional_attribute(name))
            for name, hint in hints.items()
        )

    return None


def describe_type(cls: type) -> Optional[List[FieldDescriptor]]:
    """
    Describe the declared fields of a class without an instance.

    Args:
        cls: Class to describe

    Returns:
        Ordered field descriptors, or None if the class declares no fields
        that can be discovered statically
    """
    if not isinstance(cls, type):
        return None
    described = _introspect(cls)
    return list(described) if described is not None else None


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for base in reversed(cls.__mro__):
        slots = base.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if not s.startswith('_') and s not in names)
    return names


def describe(value: Any) -> List[FieldDescriptor]:
    """
    Describe the fields of a composite value.

    Types that declare their fields are described statically. Anything else
    falls back to the public attributes found on the instance, in assignment
    order, with the runtime type of each attribute standing in for its
    declared type.

    Args:
        value: Composite value

    Returns:
        Ordered field descriptors (possibly empty)
    """
    described = describe_type(type(value))
    if described is not None:
        return described

    attributes: Dict[str, Any] = {}
    for name in _slot_names(type(value)):
        if hasattr(value, name):
            attributes[name] = getattr(value, name)
    for name, attr in getattr(value, '__dict__', {}).items():
        if not name.startswith('_'):
            attributes[name] = attr

    return [field_descriptor(name, type(attr)) for name, attr in attributes.items()]
