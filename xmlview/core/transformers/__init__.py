from .builtin import (
    ArrayTransformer,
    BoolTransformer,
    CamelCaseKeysTransformer,
    FloatTransformer,
    IntTransformer,
    LowerTransformer,
    SnakeCaseKeysTransformer,
    StripTransformer,
    UpperTransformer,
    camel_case,
    snake_case,
)
from .transform import OPTIMIZE_MODES, TRANSFORMERS, register_transformer
from .transformable import Transformable

__all__ = [
    "Transformable",
    "TRANSFORMERS",
    "OPTIMIZE_MODES",
    "register_transformer",
    "camel_case",
    "snake_case",
    "UpperTransformer",
    "LowerTransformer",
    "StripTransformer",
    "IntTransformer",
    "FloatTransformer",
    "BoolTransformer",
    "ArrayTransformer",
    "CamelCaseKeysTransformer",
    "SnakeCaseKeysTransformer",
]
