from __future__ import annotations

from typing import Any

from xmlview.core.policy.registry import PolicyRegistry

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
)

TRANSFORMERS = PolicyRegistry(kind="transformer")

for _name, _policy in (
    ("upper", UpperTransformer),
    ("lower", LowerTransformer),
    ("strip", StripTransformer),
    ("int", IntTransformer),
    ("float", FloatTransformer),
    ("bool", BoolTransformer),
    ("array", ArrayTransformer),
    ("camelcase", CamelCaseKeysTransformer),
    ("snakecase", SnakeCaseKeysTransformer),
):
    TRANSFORMERS.register(_name, _policy)

# Modes accepted by Transformable.optimize().
OPTIMIZE_MODES = ("camelcase", "snakecase")


def register_transformer(name: str, policy: Any, *, replace: bool = False) -> None:
    """Make a transformer available by name."""
    TRANSFORMERS.register(name, policy, replace=replace)
