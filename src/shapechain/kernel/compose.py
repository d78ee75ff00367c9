"""Composition table - the rules for combining two callable shapes.

Every pairing of a receiver shape with an argument shape is looked up in
``COMPOSITION_TABLE``. A pairing that is absent from the table has no
defined result and is rejected with ``InvalidCompositionError``.

Forwarding rule:
    - Producer and Transformer stages forward their *output* to the next stage.
    - Effect and Action stages have no output, so the *original* argument
      (if any) is passed through to the next stage instead.

Resolution table (receiver \\ argument):

    ============  ===========  ===========  ======  ======
                  producer     transformer  effect  action
    ============  ===========  ===========  ======  ======
    producer      -            producer     action  action
    transformer   -            transformer  effect  -
    effect        transformer  transformer  effect  -
    action        producer     -            effect  action
    ============  ===========  ===========  ======  ======
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from .errors import InvalidCompositionError

ShapeKind = Literal["producer", "transformer", "effect", "action"]

SHAPE_KINDS: tuple[ShapeKind, ...] = ("producer", "transformer", "effect", "action")

Builder = Callable[[Callable[..., Any], Callable[..., Any]], Callable[..., Any]]


@dataclass(frozen=True)
class Rule:
    """A single cell of the composition table.

    Attributes:
        result: Shape kind of the composed callable.
        build: Factory that closes over (receiver, argument) and returns the
            composed callable.
        description: Evaluation order, for error messages and reprs.
    """

    result: ShapeKind
    build: Builder
    description: str


def takes_input(kind: ShapeKind) -> bool:
    """Whether callables of this shape accept one argument."""
    return kind in ("transformer", "effect")


def yields_output(kind: ShapeKind) -> bool:
    """Whether callables of this shape return a value."""
    return kind in ("producer", "transformer")


# Producer receiver: the produced value feeds the argument.

def _produce_then_apply(receiver: Callable[[], Any], then: Callable[[Any], Any]) -> Callable[[], Any]:
    def composed() -> Any:
        return then(receiver())

    return composed


def _produce_then_consume(receiver: Callable[[], Any], then: Callable[[Any], None]) -> Callable[[], None]:
    def composed() -> None:
        then(receiver())

    return composed


def _produce_then_run(receiver: Callable[[], Any], then: Callable[[], None]) -> Callable[[], None]:
    def composed() -> None:
        receiver()
        then()

    return composed


# Transformer receiver: the transformed value feeds the argument.

def _transform_then_apply(receiver: Callable[[Any], Any], then: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def composed(arg: Any) -> Any:
        return then(receiver(arg))

    return composed


def _transform_then_consume(receiver: Callable[[Any], Any], then: Callable[[Any], None]) -> Callable[[Any], None]:
    def composed(arg: Any) -> None:
        then(receiver(arg))

    return composed


# Effect receiver: no output, so the original argument is passed through.

def _consume_then_produce(receiver: Callable[[Any], None], then: Callable[[], Any]) -> Callable[[Any], Any]:
    def composed(arg: Any) -> Any:
        receiver(arg)
        return then()

    return composed


def _consume_then_apply(receiver: Callable[[Any], None], then: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def composed(arg: Any) -> Any:
        receiver(arg)
        return then(arg)

    return composed


def _consume_then_consume(receiver: Callable[[Any], None], then: Callable[[Any], None]) -> Callable[[Any], None]:
    def composed(arg: Any) -> None:
        receiver(arg)
        then(arg)

    return composed


# Action receiver: no input and no output.

def _run_then_produce(receiver: Callable[[], None], then: Callable[[], Any]) -> Callable[[], Any]:
    def composed() -> Any:
        receiver()
        return then()

    return composed


def _run_then_consume(receiver: Callable[[], None], then: Callable[[Any], None]) -> Callable[[Any], None]:
    def composed(arg: Any) -> None:
        receiver()
        then(arg)

    return composed


def _run_then_run(receiver: Callable[[], None], then: Callable[[], None]) -> Callable[[], None]:
    def composed() -> None:
        receiver()
        then()

    return composed


COMPOSITION_TABLE: dict[tuple[ShapeKind, ShapeKind], Rule] = {
    ("producer", "transformer"): Rule("producer", _produce_then_apply, "with(receiver())"),
    ("producer", "effect"): Rule("action", _produce_then_consume, "with(receiver()), discard"),
    ("producer", "action"): Rule("action", _produce_then_run, "receiver(); with()"),
    ("transformer", "transformer"): Rule("transformer", _transform_then_apply, "with(receiver(x))"),
    ("transformer", "effect"): Rule("effect", _transform_then_consume, "with(receiver(x)), discard"),
    ("effect", "producer"): Rule("transformer", _consume_then_produce, "receiver(x); return with()"),
    ("effect", "transformer"): Rule("transformer", _consume_then_apply, "receiver(x); return with(x)"),
    ("effect", "effect"): Rule("effect", _consume_then_consume, "receiver(x); with(x)"),
    ("action", "producer"): Rule("producer", _run_then_produce, "receiver(); return with()"),
    ("action", "effect"): Rule("effect", _run_then_consume, "receiver(); with(x)"),
    ("action", "action"): Rule("action", _run_then_run, "receiver(); with()"),
}


def composable(receiver: ShapeKind, argument: ShapeKind) -> bool:
    """Return True if the pairing has an entry in the composition table."""
    return (receiver, argument) in COMPOSITION_TABLE


def resolve(receiver: ShapeKind, argument: ShapeKind) -> Rule:
    """Look up the rule for composing ``receiver`` with ``argument``.

    Raises:
        InvalidCompositionError: If the pairing is not defined.
    """
    rule = COMPOSITION_TABLE.get((receiver, argument))
    if rule is None:
        if yields_output(receiver) and not takes_input(argument):
            reason = f"the {receiver}'s output has nowhere to go"
        else:
            reason = "no composition rule is defined for this pairing"
        raise InvalidCompositionError(receiver, argument, f"Cannot compose {receiver} with {argument}: {reason}")
    return rule
