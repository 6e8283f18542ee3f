"""Property selectors — map a selector to the property name a rule reports.

A selector is one of:
    - a plain string, used verbatim
    - a PropertyRef, built with prop("price") or the proxy P.price
    - a one-argument accessor such as ``lambda o: o.price``

Accessors are resolved by calling them once against a recording probe, so no
bytecode or source inspection is involved. Anything that is not a single
direct attribute read fails fast with PropertyExpressionError. Wrappers that
never touch the read value, such as ``[o.price][0]`` or ``o.price if 1 > 0 else
None``, look identical to a plain read from the outside and still resolve.

Usage:
    validator.add_rule(P.price, lambda o: o.price <= 0, "Price must be positive")
    validator.add_rule(lambda o: o.quantity, lambda o: o.quantity <= 0, "...")
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Union

from rulebook.errors import PropertyExpressionError


@dataclass(frozen=True)
class PropertyRef:
    """A property name tagged together with its getter."""

    name: str

    def __call__(self, target: Any) -> Any:
        if isinstance(target, Mapping):
            return target[self.name]
        return getattr(target, self.name)

    def __bool__(self) -> bool:
        # A selector that branches on a read (or, and, if) is computing a value
        raise PropertyExpressionError(selector=self)

    def __str__(self) -> str:
        return self.name


Selector = Union[str, PropertyRef, Callable[[Any], Any]]


def prop(name: str) -> PropertyRef:
    """Build a PropertyRef for ``name``."""
    return PropertyRef(name)


class _PropertyProxy:
    """Attribute access yields a PropertyRef: ``P.price == prop("price")``."""

    def __getattr__(self, name: str) -> PropertyRef:
        if name.startswith("__"):
            raise AttributeError(name)
        return PropertyRef(name)

    def __repr__(self) -> str:
        return "P"


P = _PropertyProxy()


class _RecordingProbe:
    """Stand-in target that records every attribute read made on it."""

    def __init__(self):
        object.__setattr__(self, "_reads", [])

    def __getattr__(self, name: str) -> PropertyRef:
        if name.startswith("__"):
            raise AttributeError(name)
        ref = PropertyRef(name)
        self._reads.append(ref)
        return ref

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("selector must not assign to the target")


def resolve_property_name(selector: Selector) -> str:
    """Resolve a selector to a property name.

    Raises:
        PropertyExpressionError: if the selector is not a direct single-property read
    """
    if isinstance(selector, str):
        return selector
    if isinstance(selector, PropertyRef):
        return selector.name
    if not callable(selector):
        raise PropertyExpressionError(selector=selector)

    probe = _RecordingProbe()
    try:
        result = selector(probe)
    except Exception as e:
        # Computed expressions, method calls and chained reads all land here
        raise PropertyExpressionError(selector=selector) from e

    reads = probe._reads
    if len(reads) != 1 or result is not reads[0]:
        raise PropertyExpressionError(selector=selector)
    return result.name
