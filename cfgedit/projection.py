from __future__ import annotations

import logging
from typing import Any

from .colors import from_rgba, looks_like_color, to_rgba
from .host import WidgetHost
from .values import Kind, NodeRef, kind_of

logger = logging.getLogger(__name__)

NULL_PLACEHOLDER = "<null>"


class IdCounter:
    """Per-frame widget identity source; ids start at 1 and follow pre-order."""

    def __init__(self, start: int = 0):
        self.value = start

    def next(self) -> int:
        self.value += 1
        return self.value

    def skip(self, count: int) -> None:
        self.value += count


# ------------------------------ Projection ------------------------------
def project(label: str, ref: NodeRef, depth: int, counter: IdCounter, host: WidgetHost) -> bool:
    """Emit widgets for the node behind ``ref`` and write committed edits into it.

    Returns True if any edit was committed in this subtree.
    """
    ident = counter.next()
    host.push_id(ident)
    try:
        return _dispatch(label, ref, depth, counter, host)
    finally:
        host.pop_id()


def _dispatch(label: str, ref: NodeRef, depth: int, counter: IdCounter, host: WidgetHost) -> bool:
    value = ref.get()
    kind = kind_of(value)

    if kind is Kind.NULL:
        host.text(f"{label}: {NULL_PLACEHOLDER}")
        return False
    if kind is Kind.BOOL:
        return _commit(label, ref, *host.checkbox(label, value), cast=bool)
    if kind is Kind.INT:
        return _commit(label, ref, *host.input_int(label, value), cast=int)
    if kind is Kind.FLOAT:
        return _commit(label, ref, *host.input_float(label, value), cast=float)
    if kind is Kind.STRING:
        return _commit(label, ref, *host.input_text(label, value), cast=str)
    if kind is Kind.OBJECT:
        if depth == 0:
            return _members(value, depth, counter, host)
        return _group(label, value, counter, host,
                      lambda: _members(value, depth, counter, host))
    if kind is Kind.ARRAY:
        shape = looks_like_color(label, value)
        if shape is not None:
            changed, rgba = host.color_edit(label, to_rgba(value, shape), shape.channels)
            if not changed:
                return False
            value[:] = from_rgba(rgba, shape)
            logger.debug("color %s -> %r", label, value)
            return True
        if depth == 0:
            return _elements(label, value, depth, counter, host)
        return _group(label, value, counter, host,
                      lambda: _elements(label, value, depth, counter, host))
    # outside the closed kind set: draw nothing
    return False


def _commit(label: str, ref: NodeRef, changed: bool, new: Any, cast) -> bool:
    if not changed:
        return False
    ref.set(cast(new))
    logger.debug("edit %s -> %r", label, ref.get())
    return True


def consumed_ids(label: str, value: Any) -> int:
    """Ids a fully expanded projection of ``value`` takes; a color array takes one."""
    if isinstance(value, dict):
        return 1 + sum(consumed_ids(k, v) for k, v in value.items())
    if isinstance(value, list):
        if looks_like_color(label, value) is not None:
            return 1
        return 1 + sum(consumed_ids(f"{label}[{i}]", v) for i, v in enumerate(value))
    return 1


def _group(label: str, value: Any, counter: IdCounter, host: WidgetHost, body) -> bool:
    if not host.tree_node(label, True):
        # keep ids of later nodes independent of what is collapsed
        counter.skip(consumed_ids(label, value) - 1)
        return False
    try:
        return body()
    finally:
        host.tree_pop()


def _members(value: dict, depth: int, counter: IdCounter, host: WidgetHost) -> bool:
    edited = False
    for key in list(value):
        edited |= project(key, NodeRef(value, key), depth + 1, counter, host)
    return edited


def _elements(label: str, value: list, depth: int, counter: IdCounter, host: WidgetHost) -> bool:
    edited = False
    for i in range(len(value)):
        edited |= project(f"{label}[{i}]", NodeRef(value, i), depth + 1, counter, host)
    return edited


def render_document(root: NodeRef, host: WidgetHost, label: str = "Document") -> bool:
    """One projection pass over the whole document with a fresh id counter."""
    return project(label, root, 0, IdCounter(), host)
