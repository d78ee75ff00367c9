"""Entry points for building chains."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from shapechain.kernel.compose import SHAPE_KINDS, ShapeKind, takes_input, yields_output
from shapechain.kernel.errors import InvalidArgumentError
from shapechain.kernel.shapes import Action, Effect, Producer, Shape, Transformer
from shapechain.primitive import (
    IntEffect,
    IntProducer,
    IntTransformer,
    IntUnaryTransformer,
    ToIntTransformer,
)
from shapechain.tolerance import DEFAULT_POLICY, DereferencePolicy, defaulting, swallowing

T = TypeVar("T")
R = TypeVar("R")


def wrap(
    kind: ShapeKind,
    fn: Callable[..., Any],
    *,
    takes_int: bool = False,
    returns_int: bool = False,
) -> Shape:
    """Wrap a bare callable as the shape named by ``kind``.

    Args:
        kind: One of "producer", "transformer", "effect", "action"
        fn: The callable to wrap
        takes_int: Use the int-specialized variant for the input side
        returns_int: Use the int-specialized variant for the output side

    Returns:
        The shape wrapper

    Raises:
        InvalidArgumentError: If ``kind`` is unknown, ``fn`` is absent, or an
            int flag names a side the shape does not have
    """
    if kind not in SHAPE_KINDS:
        raise InvalidArgumentError(f"Unknown shape kind: {kind!r}", kind)
    if takes_int and not takes_input(kind):
        raise InvalidArgumentError(f"A {kind} has no input to specialize", kind)
    if returns_int and not yields_output(kind):
        raise InvalidArgumentError(f"A {kind} has no output to specialize", kind)
    return Shape.lift(kind, fn, takes_int=takes_int, returns_int=returns_int)


def with_default(
    target: Callable[..., R | None],
    default: R,
    policy: DereferencePolicy = DEFAULT_POLICY,
) -> Callable[..., R]:
    """Substitute ``default`` for absent values of a producer or transformer.

    A shape wrapper keeps its shape; a bare callable is wrapped as-is.
    """
    if isinstance(target, Shape):
        return target.with_default(default, policy)
    if target is None or not callable(target):
        raise InvalidArgumentError("with_default() requires a callable", target)
    return defaulting(target, default, policy)


def null_tolerant(
    target: Callable[..., Any],
    policy: DereferencePolicy = DEFAULT_POLICY,
) -> Callable[..., None]:
    """Discard dereference failures raised by an effect or action."""
    if isinstance(target, Shape):
        return target.null_tolerant(policy)
    if target is None or not callable(target):
        raise InvalidArgumentError("null_tolerant() requires a callable", target)
    return swallowing(target, policy)


class Chain:
    """Fluent entry point: ``Chain.of_producer(fn).and_(...)``."""

    @staticmethod
    def of_producer(fn: Callable[[], R]) -> Producer[R]:
        return Producer(fn)

    @staticmethod
    def of_transformer(fn: Callable[[T], R]) -> Transformer[T, R]:
        return Transformer(fn)

    @staticmethod
    def of_effect(fn: Callable[[T], None]) -> Effect[T]:
        return Effect(fn)

    @staticmethod
    def of_action(fn: Callable[[], None]) -> Action:
        return Action(fn)

    @staticmethod
    def of_int_producer(fn: Callable[[], int]) -> IntProducer:
        return IntProducer(fn)

    @staticmethod
    def of_int_transformer(fn: Callable[[int], R]) -> IntTransformer[R]:
        return IntTransformer(fn)

    @staticmethod
    def of_to_int_transformer(fn: Callable[[T], int]) -> ToIntTransformer[T]:
        return ToIntTransformer(fn)

    @staticmethod
    def of_int_unary_transformer(fn: Callable[[int], int]) -> IntUnaryTransformer:
        return IntUnaryTransformer(fn)

    @staticmethod
    def of_int_effect(fn: Callable[[int], None]) -> IntEffect:
        return IntEffect(fn)
