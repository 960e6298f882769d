# Re-exporta funciones para mantener un único punto de importación:
from .read import (
    list_products,
    get_product_by_id,
    get_product_by_nombre,
)

from .crud import (
    create_product,
    update_product,
    delete_product,
)

from .photos import (
    create_product_with_photo,
    attach_photo,
    remove_product,
)

__all__ = [
    # read
    "list_products", "get_product_by_id", "get_product_by_nombre",
    # crud
    "create_product", "update_product", "delete_product",
    # photos
    "create_product_with_photo", "attach_photo", "remove_product",
]
