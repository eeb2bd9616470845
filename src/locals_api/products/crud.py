from collections.abc import Sequence
import uuid

from sqlalchemy import or_
from sqlmodel import Session, col

from locals_api.core.bulk import run_bulk
from locals_api.core.exceptions import InvalidInputError, from_repository_error
from locals_api.core.logging import get_logger
from locals_api.core.repository import Repository, RepositoryError
from locals_api.products.models import (
    SORTABLE_FIELDS,
    Product,
    ProductBulkResult,
    ProductCreate,
    ProductPublic,
    ProductUpdate,
)

logger = get_logger(__name__)

DEFAULT_SORT_FIELD = "created_at"


def _products(session: Session) -> Repository[Product]:
    return Repository(session, Product, unique_fields=("code",))


def get_products(
    *,
    session: Session,
    search: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
) -> tuple[list[Product], int]:
    """List products matching an optional search, sorted.

    Args:
        session: Database session
        search: Case-insensitive substring matched against name or code
        sort_by: Product column to sort on (default ``created_at``)
        order: ``asc`` or ``desc`` (default ``desc``)

    Returns:
        Tuple of (list of products, total count)

    Raises:
        InvalidInputError: If sort_by or order is not recognised
    """
    sort_field = sort_by or DEFAULT_SORT_FIELD
    if sort_field not in SORTABLE_FIELDS:
        raise InvalidInputError(f"Cannot sort products by '{sort_field}'", field="sortBy")

    direction = (order or "desc").lower()
    if direction not in ("asc", "desc"):
        raise InvalidInputError("Order must be 'asc' or 'desc'", field="order")

    where = []
    if search:
        where.append(
            or_(
                col(Product.name).icontains(search, autoescape=True),
                col(Product.code).icontains(search, autoescape=True),
            )
        )

    column = col(getattr(Product, sort_field))
    ordering = column.asc() if direction == "asc" else column.desc()

    products = _products(session)
    return products.find_many(*where, order_by=ordering), products.count(*where)


def get_product(*, session: Session, product_id: uuid.UUID) -> Product | None:
    return _products(session).get(product_id)


def create_product(*, session: Session, product_in: ProductCreate) -> Product:
    """Create a new product.

    Raises:
        ResourceExistsError: If another product already uses the code
    """
    try:
        product = _products(session).create(product_in)
    except RepositoryError as e:
        raise from_repository_error(
            e, resource="Product", unique_field="code", operation="create"
        ) from e
    logger.info("product_created", product_id=str(product.id), code=product.code)
    return product


def create_products_bulk(
    *, session: Session, products_in: Sequence[ProductCreate]
) -> ProductBulkResult:
    """Create products one by one, isolating failures per item.

    A duplicate code later in the batch fails while the earlier occurrence is
    kept.
    """

    def create_one(product_in: ProductCreate) -> ProductPublic:
        product = create_product(session=session, product_in=product_in)
        return ProductPublic.model_validate(product)

    result = run_bulk(products_in, create_one, identify=lambda p: p.code)
    logger.info(
        "products_bulk_created",
        total=result.total,
        created=result.created,
        failed=result.failed,
    )
    return result


def update_product(
    *, session: Session, db_product: Product, product_in: ProductUpdate
) -> Product:
    """Apply a partial update to a product.

    Raises:
        ResourceExistsError: If the new code belongs to another product
    """
    product_data = product_in.model_dump(exclude_unset=True)
    try:
        return _products(session).update(db_product, product_data)
    except RepositoryError as e:
        raise from_repository_error(
            e, resource="Product", unique_field="code", operation="update"
        ) from e


def delete_product(*, session: Session, db_product: Product) -> None:
    """Delete a product.

    Raises:
        InvalidInputError: If other records still reference the product
    """
    try:
        _products(session).delete(db_product)
    except RepositoryError as e:
        raise from_repository_error(e, resource="Product", operation="delete") from e
