"""Null-tolerant decoration of bare callables.

These functions work on any callable and know nothing about shapes; the
shape wrappers use them to build ``with_default`` and ``null_tolerant``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .policy import DEFAULT_POLICY, DereferencePolicy

logger = logging.getLogger(__name__)

R = TypeVar("R")


def defaulting(
    fn: Callable[..., R | None],
    default: R,
    policy: DereferencePolicy = DEFAULT_POLICY,
) -> Callable[..., R]:
    """Wrap a value-returning callable so absence yields ``default``.

    The returned callable accepts the same arguments as ``fn`` and:
        - returns the result unchanged when it is not None
        - returns ``default`` when the result is None
        - returns ``default`` when ``fn`` raises a dereference failure
        - re-raises every other exception unchanged

    Args:
        fn: The callable to protect
        default: Value substituted for an absent result
        policy: Decides which exceptions are dereference failures

    Returns:
        The protected callable
    """
    catchable = policy.catchable

    def tolerant(*args: Any) -> R:
        try:
            value = fn(*args)
        except catchable as exc:
            if not policy.matches(exc):
                raise
            logger.debug("Substituting default after %s: %s", type(exc).__name__, exc)
            return default
        if value is None:
            logger.debug("Substituting default for absent result")
            return default
        return value

    return tolerant


def swallowing(
    fn: Callable[..., Any],
    policy: DereferencePolicy = DEFAULT_POLICY,
) -> Callable[..., None]:
    """Wrap a void callable so dereference failures are silently discarded."""
    catchable = policy.catchable

    def tolerant(*args: Any) -> None:
        try:
            fn(*args)
        except catchable as exc:
            if not policy.matches(exc):
                raise
            logger.debug("Discarding %s: %s", type(exc).__name__, exc)

    return tolerant
