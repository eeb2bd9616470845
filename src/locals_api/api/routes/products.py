import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query, status

from locals_api.auth import SessionDep
from locals_api.core.base_models import SuccessResponse
from locals_api.core.exceptions import ResourceNotFoundError
from locals_api.core.logging import get_logger
from locals_api.products import (
    Product,
    ProductBulkResult,
    ProductCreate,
    ProductEnvelope,
    ProductPublic,
    ProductsPublic,
    ProductUpdate,
    create_product,
    create_products_bulk,
    delete_product,
    get_product,
    get_products,
    update_product,
)

router = APIRouter(prefix="/products", tags=["products"])
logger = get_logger(__name__)

SearchQuery = Annotated[
    str | None, Query(description="Case-insensitive match on name or code")
]
SortByQuery = Annotated[str | None, Query(alias="sortBy", description="Column to sort on")]
OrderQuery = Annotated[str | None, Query(description="asc or desc")]


def get_existing_product(
    session: SessionDep,
    product_id: Annotated[uuid.UUID, Path(description="Product UUID")],
) -> Product:
    """Load a product by id.

    Raises:
        ResourceNotFoundError: 404 if the product does not exist
    """
    product = get_product(session=session, product_id=product_id)
    if not product:
        raise ResourceNotFoundError("Product", str(product_id))
    return product


ExistingProduct = Annotated[Product, Depends(get_existing_product)]


def _list_products(
    session: SessionDep,
    search: str | None,
    sort_by: str | None,
    order: str | None,
) -> ProductsPublic:
    products, total = get_products(
        session=session, search=search, sort_by=sort_by, order=order
    )
    return ProductsPublic(
        data=[ProductPublic.model_validate(p) for p in products], total=total
    )


@router.get("", response_model=ProductsPublic)
def read_products(
    session: SessionDep,
    search: SearchQuery = None,
    sort_by: SortByQuery = None,
    order: OrderQuery = None,
) -> Any:
    """List products, optionally filtered and sorted (newest first by default)."""
    return _list_products(session, search, sort_by, order)


@router.get("/export", response_model=ProductsPublic)
def export_products(
    session: SessionDep,
    search: SearchQuery = None,
    sort_by: SortByQuery = None,
    order: OrderQuery = None,
) -> Any:
    """Full product listing for spreadsheet export, same filters as the list."""
    result = _list_products(session, search, sort_by, order)
    logger.info("products_exported", total=result.total)
    return result


@router.get("/{product_id}", response_model=ProductEnvelope)
def read_product(product: ExistingProduct) -> Any:
    """Get a product by ID."""
    return ProductEnvelope(data=ProductPublic.model_validate(product))


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
def create_product_endpoint(session: SessionDep, product_in: ProductCreate) -> Any:
    """Create a product. The code must be unique."""
    product = create_product(session=session, product_in=product_in)
    return ProductEnvelope(data=ProductPublic.model_validate(product))


@router.post("/bulk", response_model=ProductBulkResult)
def create_products_bulk_endpoint(
    session: SessionDep,
    products_in: Annotated[list[ProductCreate], Body()],
) -> Any:
    """Create several products; each item succeeds or fails on its own.

    The response lists successes and failures by their position in the
    request. An empty list is rejected before anything is created.
    """
    return create_products_bulk(session=session, products_in=products_in)


@router.put("/{product_id}", response_model=ProductEnvelope)
def update_product_endpoint(
    session: SessionDep,
    product: ExistingProduct,
    product_in: ProductUpdate,
) -> Any:
    """Update a product's fields."""
    updated = update_product(session=session, db_product=product, product_in=product_in)
    logger.info(
        "product_updated",
        product_id=str(updated.id),
        fields=sorted(product_in.model_dump(exclude_unset=True)),
    )
    return ProductEnvelope(data=ProductPublic.model_validate(updated))


@router.delete("/{product_id}", response_model=SuccessResponse)
def delete_product_endpoint(session: SessionDep, product: ExistingProduct) -> Any:
    """Delete a product unless other records still reference it."""
    product_id = str(product.id)
    delete_product(session=session, db_product=product)
    logger.info("product_deleted", product_id=product_id)
    return SuccessResponse()
