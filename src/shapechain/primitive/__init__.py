"""Int-specialized shape variants.

Importing this package registers the variants with the shape registry, so
composing int shapes yields int shapes.
"""

from .shapes import (
    IntEffect,
    IntProducer,
    IntTransformer,
    IntUnaryTransformer,
    ToIntTransformer,
    as_int,
)

__all__ = [
    "IntProducer",
    "IntTransformer",
    "ToIntTransformer",
    "IntUnaryTransformer",
    "IntEffect",
    "as_int",
]
