from .builtin import BoolCast, DateCast, FirstCast, FloatCast, IntCast, JoinCast, ListCast, StrCast
from .cast import CASTS, Cast, register_cast

__all__ = [
    "CASTS",
    "Cast",
    "register_cast",
    "ListCast",
    "FirstCast",
    "IntCast",
    "FloatCast",
    "BoolCast",
    "StrCast",
    "DateCast",
    "JoinCast",
]
