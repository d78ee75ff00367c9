"""Int-specialized shapes.

Values crossing an int boundary are converted with ``operator.index``.
A None crossing an int boundary raises DereferenceError, so null-tolerant
wrappers treat it exactly like a dereference failure.
"""

from __future__ import annotations

import operator
from typing import Any, ClassVar, Generic, TypeVar

from shapechain.kernel.errors import DereferenceError
from shapechain.kernel.shapes import Effect, Producer, Shape, Transformer

T = TypeVar("T")
R = TypeVar("R")


def as_int(value: Any, boundary: str) -> int:
    """Convert a value crossing an int boundary.

    Args:
        value: The value to convert
        boundary: "input" or "output", for the error message

    Returns:
        The value as an int

    Raises:
        DereferenceError: If the value is None
        TypeError: If the value has no integer representation
    """
    if value is None:
        raise DereferenceError(f"None crossed an int {boundary} boundary", subject=boundary)
    return operator.index(value)


@Shape.register_variant
class IntProducer(Producer[int]):
    """Producer of ints."""

    returns_int: ClassVar[bool] = True

    def __call__(self) -> int:
        return as_int(self.fn(), "output")


@Shape.register_variant
class IntTransformer(Transformer[int, R], Generic[R]):
    """Transformer from an int to any value."""

    takes_int: ClassVar[bool] = True

    def __call__(self, arg: int) -> R:
        return self.fn(as_int(arg, "input"))


@Shape.register_variant
class ToIntTransformer(Transformer[T, int], Generic[T]):
    """Transformer from any value to an int."""

    returns_int: ClassVar[bool] = True

    def __call__(self, arg: T) -> int:
        return as_int(self.fn(arg), "output")


@Shape.register_variant
class IntUnaryTransformer(Transformer[int, int]):
    """Transformer from an int to an int."""

    takes_int: ClassVar[bool] = True
    returns_int: ClassVar[bool] = True

    def __call__(self, arg: int) -> int:
        return as_int(self.fn(as_int(arg, "input")), "output")


@Shape.register_variant
class IntEffect(Effect[int]):
    """Effect that consumes an int."""

    takes_int: ClassVar[bool] = True

    def __call__(self, arg: int) -> None:
        self.fn(as_int(arg, "input"))
