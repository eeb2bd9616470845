"""Base models and mixins for SQLModel schemas.

Database models (table=True) inherit from the composed base classes; responses
are wrapped in the ``{success, data}`` envelopes defined at the bottom.

Example:
    class Product(ProductBase, TimestampedTable, table=True):
        ...

    @router.get("/{product_id}", response_model=Envelope[ProductPublic])
    def read_product(...):
        return Envelope(data=product)
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps for audit trail."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: User, Product, Translation
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class Envelope(SQLModel, Generic[T]):
    """Standard single-payload response wrapper."""

    success: bool = True
    data: T


class ListEnvelope(SQLModel, Generic[T]):
    """Listing response with the number of matching rows."""

    success: bool = True
    data: list[T]
    total: int


class SuccessResponse(SQLModel):
    """Response for operations with nothing to return (e.g. deletes)."""

    success: bool = True
