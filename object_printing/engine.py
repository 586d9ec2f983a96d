"""
Render Engine

Walks an object graph and renders it as nested text, consulting a
``PrintingConfig`` at every node:

1. ``None`` renders as ``null``.
2. A renderer registered for the field path wins.
3. Then a renderer registered for the exact runtime type.
4. Leaf values (numbers, strings, dates, durations, ...) render with ``str()``.
5. Containers render one ``[index] = value`` line per item.
6. Anything else renders its type name followed by one ``name = value`` line
   per field that is not excluded by declared type or by path.
"""

import collections.abc
import datetime
import decimal
import enum
import logging
import uuid
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Iterable, Tuple

from .descriptors import describe

if TYPE_CHECKING:
    from .printing_config import PrintingConfig

logger = logging.getLogger(__name__)

LEAF_TYPES: FrozenSet[type] = frozenset({
    int,
    float,
    str,
    datetime.datetime,
    datetime.timedelta,
    bool,
    complex,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    uuid.UUID,
    bytes,
    bytearray,
})

_LEAF_CLASSES = tuple(LEAF_TYPES)


def is_leaf(value: Any) -> bool:
    """Return True if ``value`` renders with its default text form."""
    return isinstance(value, _LEAF_CLASSES) or isinstance(value, enum.Enum)


def child_path(path: str, name: str) -> str:
    """Join a parent path and a field name."""
    return f"{path}.{name}" if path else name


def _contains(members: FrozenSet[Any], key: Any) -> bool:
    try:
        return key in members
    except TypeError:
        # Unhashable annotations can never be registered
        return False


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), '_fields')


class RenderEngine:
    """
    Renders values according to one printing configuration.

    The engine holds no state between calls; the chain of values being
    rendered lives on the call stack.
    """

    def __init__(self, config: 'PrintingConfig[Any]'):
        self.config = config
        self.settings = config.settings

    def render(self, value: Any, path: str = "", depth: int = 0) -> str:
        """
        Render a value.

        Args:
            value: Value to render
            path: Field path of the value; empty for the root
            depth: Nesting level of the value

        Returns:
            The rendered text, ending with one line terminator
        """
        return self._render(value, path, depth, frozenset())

    def _line(self, text: str) -> str:
        return text + self.settings.line_terminator

    def _apply(self, renderer: Callable[[Any], str], value: Any, scope: str) -> str:
        try:
            return self._line(renderer(value))
        except Exception:
            logger.error(f"Renderer for {scope} failed on a {type(value).__name__} value")
            raise

    def _render(self, value: Any, path: str, depth: int, ancestors: FrozenSet[int]) -> str:
        if value is None:
            return self._line("null")

        if path and path in self.config.path_renderers:
            return self._apply(self.config.path_renderers[path], value, f"path '{path}'")

        value_type = type(value)
        type_renderer = self.config.type_renderers.get(value_type)
        if type_renderer is not None:
            return self._apply(type_renderer, value, f"type {value_type.__name__}")

        if is_leaf(value):
            return self._line(str(value))

        max_depth = self.settings.max_depth
        if max_depth is not None and depth > max_depth:
            logger.warning(f"Depth limit {max_depth} reached at '{path}', truncating {value_type.__name__}")
            return self._line(self.settings.depth_marker)

        if id(value) in ancestors:
            logger.warning(f"Cycle detected at '{path}' on {value_type.__name__}")
            return self._line(self.settings.cycle_marker.format(type_name=value_type.__name__))
        ancestors = ancestors | {id(value)}

        if isinstance(value, collections.abc.Mapping):
            items = ((f"[{key}]", item) for key, item in value.items())
            return self._render_items(value_type.__name__, items, path, depth, ancestors)

        if isinstance(value, collections.abc.Set):
            return self._render_set(value, path, depth, ancestors)

        if (isinstance(value, collections.abc.Sequence)
                and not isinstance(value, (str, bytes, bytearray))
                and not _is_named_tuple(value)):
            items = ((f"[{index}]", item) for index, item in enumerate(value))
            return self._render_items(value_type.__name__, items, path, depth, ancestors)

        return self._render_composite(value, path, depth, ancestors)

    def _join_items(self, type_name: str, entries: Iterable[Tuple[str, str]], depth: int) -> str:
        indentation = self.settings.indent(depth + 1)
        lines = [indentation + label + " = " + text for label, text in entries]
        return self._line(type_name) + "".join(lines)

    def _render_items(self, type_name: str, items: Iterable[Tuple[str, Any]], path: str,
                      depth: int, ancestors: FrozenSet[int]) -> str:
        # Items keep the path of the field holding the container
        entries = ((label, self._render(item, path, depth + 1, ancestors)) for label, item in items)
        return self._join_items(type_name, entries, depth)

    def _render_set(self, value: Any, path: str, depth: int, ancestors: FrozenSet[int]) -> str:
        # Iteration order of a set depends on hashes, so items are ordered by their output
        rendered = sorted(
            (type(item).__name__, self._render(item, path, depth + 1, ancestors))
            for item in value
        )
        entries = ((f"[{index}]", text) for index, (_, text) in enumerate(rendered))
        return self._join_items(type(value).__name__, entries, depth)

    def _render_composite(self, value: Any, path: str, depth: int, ancestors: FrozenSet[int]) -> str:
        indentation = self.settings.indent(depth + 1)
        excluded_types = self.config.excluded_types
        excluded_paths = self.config.excluded_paths

        lines = []
        for field in describe(value):
            field_path = child_path(path, field.name)
            if _contains(excluded_types, field.declared_type) or field_path in excluded_paths:
                continue
            lines.append(
                indentation + field.name + " = "
                + self._render(field.accessor(value), field_path, depth + 1, ancestors)
            )

        return self._line(type(value).__name__) + "".join(lines)
