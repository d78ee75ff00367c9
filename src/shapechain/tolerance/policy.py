"""Dereference policy - what counts as the distinguished failure."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shapechain.kernel.errors import DereferenceError


class DereferencePolicy(BaseModel):
    """Decides which exceptions a null-tolerant wrapper may intercept.

    ``DereferenceError`` (and its subclasses) is always intercepted. The
    flags only widen that to the interpreter's own errors for ``None``.

    Attributes:
        none_attribute_access: Treat the interpreter's ``AttributeError`` for an
            attribute looked up on ``None`` as a dereference failure.
        none_operand_errors: Treat the interpreter's ``TypeError`` for
            subscripting, iterating, calling or operating on ``None`` as a
            dereference failure.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    none_attribute_access: bool = True
    none_operand_errors: bool = True

    @property
    def catchable(self) -> tuple[type[BaseException], ...]:
        """Exception classes to catch before narrowing with ``matches``."""
        types: tuple[type[BaseException], ...] = (DereferenceError,)
        if self.none_attribute_access:
            types = types + (AttributeError,)
        if self.none_operand_errors:
            types = types + (TypeError,)
        return types

    def matches(self, exc: BaseException) -> bool:
        """Return True if ``exc`` is a dereference failure under this policy."""
        if isinstance(exc, DereferenceError):
            return True
        if self.none_attribute_access and isinstance(exc, AttributeError):
            # Set by the interpreter; a hand-raised AttributeError has no name.
            return exc.name is not None and exc.obj is None
        if self.none_operand_errors and isinstance(exc, TypeError):
            return "'NoneType'" in str(exc)
        return False


DEFAULT_POLICY = DereferencePolicy()
