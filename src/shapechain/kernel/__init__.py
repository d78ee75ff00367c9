"""Kernel layer - shapes, the composition table and errors."""

from shapechain.kernel.errors import (
    ChainError,
    DereferenceError,
    InvalidArgumentError,
    InvalidCompositionError,
)
from shapechain.kernel.compose import (
    COMPOSITION_TABLE,
    SHAPE_KINDS,
    Rule,
    ShapeKind,
    composable,
    resolve,
)
from shapechain.kernel.shapes import Action, Effect, Producer, Shape, Transformer

__all__ = [
    # Shapes
    "Shape",
    "Producer",
    "Transformer",
    "Effect",
    "Action",
    # Composition
    "COMPOSITION_TABLE",
    "SHAPE_KINDS",
    "Rule",
    "ShapeKind",
    "composable",
    "resolve",
    # Errors
    "ChainError",
    "InvalidArgumentError",
    "InvalidCompositionError",
    "DereferenceError",
]
