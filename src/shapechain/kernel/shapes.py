"""Shape wrappers - composable adapters around bare callables."""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from shapechain.tolerance.defaults import defaulting, swallowing
from shapechain.tolerance.policy import DEFAULT_POLICY, DereferencePolicy

from .compose import ShapeKind, resolve, takes_input, yields_output
from .errors import InvalidArgumentError, InvalidCompositionError

T = TypeVar("T")
R = TypeVar("R")


# Variant registry - (kind, takes_int, returns_int) -> wrapper class
_variants_registry: dict[tuple[ShapeKind, bool, bool], type[Shape]] = {}


@dataclass(frozen=True)
class Shape:
    """Base class for all shape wrappers.

    A wrapper holds one callable and a class-level ``kind`` tag. Composition
    never mutates a wrapper; ``and_`` always returns a new one built from the
    composition table.

    Variants (such as the int-specialized shapes) can be registered via
    register_variant() so that composition results keep their specialization.
    Null-tolerant wrappers keep the kind and the output specialization, but
    accept any input: a None reaching an int input yields the default.
    """

    fn: Callable[..., Any]

    kind: ClassVar[ShapeKind]
    # Shape assumed for a bare callable passed to and_()
    successor: ClassVar[ShapeKind] = "transformer"
    takes_int: ClassVar[bool] = False
    returns_int: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self.fn is None:
            raise InvalidArgumentError(f"Cannot wrap None as a {self.kind}")
        if not callable(self.fn):
            raise InvalidArgumentError(
                f"Cannot wrap non-callable {type(self.fn).__name__} as a {self.kind}",
                self.fn,
            )

    @classmethod
    def register_variant(cls, variant: type[Shape]) -> type[Shape]:
        """Register a wrapper class as the result type for its signature.

        Args:
            variant: Wrapper class with ``kind``, ``takes_int`` and ``returns_int`` set

        Returns:
            The class itself, so this can be used as a decorator
        """
        _variants_registry[(variant.kind, variant.takes_int, variant.returns_int)] = variant
        return variant

    @staticmethod
    def lift(
        kind: ShapeKind,
        fn: Callable[..., Any],
        *,
        takes_int: bool = False,
        returns_int: bool = False,
    ) -> Shape:
        """Wrap ``fn`` in the registered class for the given signature.

        Falls back to the generic class for ``kind`` if no specialized
        variant is registered.
        """
        variant = _variants_registry.get((kind, takes_int, returns_int))
        if variant is None:
            variant = _variants_registry.get((kind, False, False))
        if variant is None:
            raise InvalidArgumentError(f"Unknown shape kind: {kind!r}", kind)
        return variant(fn)

    def and_(self, other: Callable[..., Any]) -> Shape:
        """Compose this wrapper with another callable.

        A wrapper argument is classified by its own ``kind``; a bare callable
        is classified as this wrapper's ``successor`` shape. Use the explicit
        ``and_producer`` / ``and_transformer`` / ``and_effect`` / ``and_action``
        methods to classify a bare callable differently.

        Args:
            other: A shape wrapper or bare callable

        Returns:
            New wrapper whose shape follows the composition table

        Raises:
            InvalidArgumentError: If ``other`` is None or not callable
            InvalidCompositionError: If the pairing is not defined
        """
        if isinstance(other, Shape):
            return self._compose(other.kind, other)
        return self._compose(self.successor, other)

    def __and__(self, other: Callable[..., Any]) -> Shape:
        return self.and_(other)

    def and_producer(self, fn: Callable[[], Any]) -> Shape:
        return self._compose("producer", fn)

    def and_transformer(self, fn: Callable[[Any], Any]) -> Shape:
        return self._compose("transformer", fn)

    def and_effect(self, fn: Callable[[Any], None]) -> Shape:
        return self._compose("effect", fn)

    def and_action(self, fn: Callable[[], None]) -> Shape:
        return self._compose("action", fn)

    def _compose(self, kind: ShapeKind, other: Callable[..., Any]) -> Shape:
        if other is None:
            raise InvalidArgumentError(f"Cannot compose a {self.kind} with None")
        if not callable(other):
            raise InvalidArgumentError(
                f"Cannot compose a {self.kind} with non-callable {type(other).__name__}",
                other,
            )
        other_takes_int = other_returns_int = False
        if isinstance(other, Shape):
            if other.kind != kind:
                raise InvalidArgumentError(f"Expected shape {kind!r}, got {other.kind!r}", other)
            other_takes_int, other_returns_int = other.takes_int, other.returns_int

        rule = resolve(self.kind, kind)

        # Input comes from the receiver when it has one, otherwise from the argument.
        # Output always comes from the argument.
        in_int = self.takes_int if takes_input(self.kind) else other_takes_int
        return Shape.lift(
            rule.result,
            rule.build(self, other),
            takes_int=in_int and takes_input(rule.result),
            returns_int=other_returns_int and yields_output(rule.result),
        )

    def with_default(self, default: Any, policy: DereferencePolicy = DEFAULT_POLICY) -> Shape:
        raise InvalidCompositionError(
            self.kind, "with_default", f"with_default() is not available on a {self.kind}"
        )

    def null_tolerant(self, policy: DereferencePolicy = DEFAULT_POLICY) -> Shape:
        raise InvalidCompositionError(
            self.kind, "null_tolerant", f"null_tolerant() is not available on a {self.kind}"
        )

    def _checked_default(self, default: Any) -> Any:
        if not self.returns_int:
            return default
        try:
            return operator.index(default)
        except TypeError as exc:
            raise InvalidArgumentError(
                f"{type(self).__name__} requires an int default, got {type(default).__name__}",
                default,
            ) from exc


@Shape.register_variant
class Producer(Shape, Generic[R]):
    """Callable with no input that yields a value."""

    kind: ClassVar[ShapeKind] = "producer"

    def __call__(self) -> R:
        return self.fn()

    def with_default(self, default: R, policy: DereferencePolicy = DEFAULT_POLICY) -> Producer[R]:
        """Return a producer that yields ``default`` instead of an absent value.

        Absent means the producer returned None or raised a dereference
        failure (as decided by ``policy``). Other exceptions propagate.
        """
        default = self._checked_default(default)
        tolerant = defaulting(self, default, policy)
        return Shape.lift(self.kind, tolerant, returns_int=self.returns_int)  # type: ignore[return-value]

    def get_with_default(self, default: R, policy: DereferencePolicy = DEFAULT_POLICY) -> R:
        """Invoke once, substituting ``default`` for an absent value."""
        return self.with_default(default, policy)()


@Shape.register_variant
class Transformer(Shape, Generic[T, R]):
    """Callable that maps one input to a value."""

    kind: ClassVar[ShapeKind] = "transformer"

    def __call__(self, arg: T) -> R:
        return self.fn(arg)

    def with_default(self, default: R, policy: DereferencePolicy = DEFAULT_POLICY) -> Transformer[T, R]:
        """Return a transformer that yields ``default`` instead of an absent value."""
        default = self._checked_default(default)
        tolerant = defaulting(self, default, policy)
        return Shape.lift(self.kind, tolerant, returns_int=self.returns_int)  # type: ignore[return-value]

    def apply_with_default(self, arg: T, default: R, policy: DereferencePolicy = DEFAULT_POLICY) -> R:
        """Apply once to ``arg``, substituting ``default`` for an absent value."""
        return self.with_default(default, policy)(arg)


@Shape.register_variant
class Effect(Shape, Generic[T]):
    """Callable that consumes one input and yields nothing."""

    kind: ClassVar[ShapeKind] = "effect"

    def __call__(self, arg: T) -> None:
        self.fn(arg)

    def null_tolerant(self, policy: DereferencePolicy = DEFAULT_POLICY) -> Effect[T]:
        """Return an effect that silently discards dereference failures."""
        return Shape.lift(self.kind, swallowing(self, policy))  # type: ignore[return-value]


@Shape.register_variant
class Action(Shape):
    """Callable with no input that yields nothing."""

    kind: ClassVar[ShapeKind] = "action"
    successor: ClassVar[ShapeKind] = "producer"

    def __call__(self) -> None:
        self.fn()

    def null_tolerant(self, policy: DereferencePolicy = DEFAULT_POLICY) -> Action:
        """Return an action that silently discards dereference failures."""
        return Shape.lift(self.kind, swallowing(self, policy))  # type: ignore[return-value]
