from . import categories
from . import client
from . import products

__all__ = [
    "categories",
    "client",
    "products",
]
