"""xmlview API package.

Optional FastAPI service layer that converts uploaded XML documents into
normalized JSON through XMLCollection casts and transforms.
"""

from .server import create_app  # noqa: F401
