"""Error types for shape wrapping, composition and null tolerance."""

from __future__ import annotations


class ChainError(Exception):
    """Base class for every error raised by shapechain."""


class InvalidArgumentError(ChainError, ValueError):
    """Error raised when a required callable argument is absent or unusable.

    Raised at construction time, never at invocation time.
    """

    def __init__(self, message: str, argument: object = None) -> None:
        self.argument = argument
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InvalidArgumentError({super().__str__()!r}, argument={self.argument!r})"


class InvalidCompositionError(ChainError, TypeError):
    """Error raised when two shapes have no defined combination.

    Preserves the receiver and argument shape kinds so callers can see
    which pairing was rejected.
    """

    def __init__(self, receiver: str, argument: str, message: str | None = None) -> None:
        self.receiver = receiver
        self.argument = argument
        super().__init__(message or f"Cannot compose {receiver} with {argument}")

    def __repr__(self) -> str:
        return (
            f"InvalidCompositionError(receiver={self.receiver!r}, "
            f"argument={self.argument!r})"
        )


class DereferenceError(ChainError):
    """The distinguished failure: a callable dereferenced an absent value.

    This is the only failure kind that null-tolerant wrappers intercept.
    """

    def __init__(self, message: str = "Dereferenced an absent value", subject: str | None = None) -> None:
        self.subject = subject
        super().__init__(message)

    def __repr__(self) -> str:
        return f"DereferenceError({super().__str__()!r}, subject={self.subject!r})"
