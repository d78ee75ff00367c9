"""Null tolerance - default substitution for absent values."""

from .defaults import defaulting, swallowing
from .policy import DEFAULT_POLICY, DereferencePolicy

__all__ = [
    "DEFAULT_POLICY",
    "DereferencePolicy",
    "defaulting",
    "swallowing",
]
