from .contracts import Invocable, StaticApply
from .registry import PolicyRegistry, resolve_policy

__all__ = [
    "Invocable",
    "StaticApply",
    "PolicyRegistry",
    "resolve_policy",
]
