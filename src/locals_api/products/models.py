import uuid

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from locals_api.core.base_models import (
    Envelope,
    ListEnvelope,
    TimestampedTable,
    TimestampResponseMixin,
)
from locals_api.core.bulk import BulkResult


class ProductBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, index=True)
    code: str = Field(min_length=1, max_length=100, unique=True, index=True)
    unit: str = Field(min_length=1, max_length=50)
    in_price: float
    price: float
    vat: float
    currency: str = Field(min_length=1, max_length=10)
    stock: int
    description: str | None = Field(default=None, max_length=2000)


class Product(ProductBase, TimestampedTable, table=True):
    pass


class ProductCreate(ProductBase):
    pass


class ProductUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    code: str | None = Field(default=None, min_length=1, max_length=100)
    unit: str | None = Field(default=None, min_length=1, max_length=50)
    in_price: float | None = None
    price: float | None = None
    vat: float | None = None
    currency: str | None = Field(default=None, min_length=1, max_length=10)
    stock: int | None = None
    description: str | None = Field(default=None, max_length=2000)

    # Only description may be cleared; the other columns are NOT NULL
    @field_validator(
        "name", "code", "unit", "in_price", "price", "vat", "currency", "stock"
    )
    @classmethod
    def validate_not_null(cls, v: str | float | int | None) -> str | float | int:
        if v is None:
            raise ValueError("value cannot be null")
        return v


class ProductPublic(ProductBase, TimestampResponseMixin):
    id: uuid.UUID


# Columns a listing may be sorted by
SORTABLE_FIELDS = frozenset(
    {
        "name",
        "code",
        "unit",
        "in_price",
        "price",
        "vat",
        "currency",
        "stock",
        "created_at",
        "updated_at",
    }
)

ProductEnvelope = Envelope[ProductPublic]
ProductsPublic = ListEnvelope[ProductPublic]
ProductBulkResult = BulkResult[ProductPublic]
