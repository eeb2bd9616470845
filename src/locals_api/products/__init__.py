from locals_api.products.crud import (
    create_product,
    create_products_bulk,
    delete_product,
    get_product,
    get_products,
    update_product,
)
from locals_api.products.models import (
    Product,
    ProductBase,
    ProductBulkResult,
    ProductCreate,
    ProductEnvelope,
    ProductPublic,
    ProductsPublic,
    ProductUpdate,
)

__all__ = [
    # Models
    "Product",
    "ProductBase",
    "ProductBulkResult",
    "ProductCreate",
    "ProductEnvelope",
    "ProductPublic",
    "ProductUpdate",
    "ProductsPublic",
    # CRUD
    "create_product",
    "create_products_bulk",
    "delete_product",
    "get_product",
    "get_products",
    "update_product",
]
