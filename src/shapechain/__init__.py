from .kernel import (
    COMPOSITION_TABLE,
    SHAPE_KINDS,
    Action,
    ChainError,
    DereferenceError,
    Effect,
    InvalidArgumentError,
    InvalidCompositionError,
    Producer,
    Rule,
    Shape,
    ShapeKind,
    Transformer,
    composable,
    resolve,
)
from .primitive import (
    IntEffect,
    IntProducer,
    IntTransformer,
    IntUnaryTransformer,
    ToIntTransformer,
)
from .tolerance import DEFAULT_POLICY, DereferencePolicy
from .builder import Chain, null_tolerant, with_default, wrap

__all__ = [
    # Shapes
    "Shape",
    "Producer",
    "Transformer",
    "Effect",
    "Action",
    "IntProducer",
    "IntTransformer",
    "ToIntTransformer",
    "IntUnaryTransformer",
    "IntEffect",
    # Building
    "Chain",
    "wrap",
    "with_default",
    "null_tolerant",
    # Composition
    "COMPOSITION_TABLE",
    "SHAPE_KINDS",
    "Rule",
    "ShapeKind",
    "composable",
    "resolve",
    # Null tolerance
    "DEFAULT_POLICY",
    "DereferencePolicy",
    # Errors
    "ChainError",
    "InvalidArgumentError",
    "InvalidCompositionError",
    "DereferenceError",
]
