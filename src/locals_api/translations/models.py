from typing import Any
import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from locals_api.core.base_models import Envelope, TimestampedTable, TimestampResponseMixin


class TranslationBase(SQLModel):
    # Dot-delimited path, e.g. "nav.home.title"
    key: str = Field(min_length=1, max_length=255, index=True)
    language: str = Field(min_length=1, max_length=10, index=True)
    value: str = Field(min_length=1)


class Translation(TranslationBase, TimestampedTable, table=True):
    __table_args__ = (
        UniqueConstraint("key", "language", name="uq_translation_key_language"),
    )


class TranslationCreate(TranslationBase):
    pass


class TranslationBulkCreate(SQLModel):
    items: list[TranslationCreate]


class TranslationUpdate(SQLModel):
    """Replacement fields for the translation found by key + language."""

    language: str = Field(min_length=1, max_length=10)
    value: str | None = Field(default=None, min_length=1)


class TranslationPublic(TranslationBase, TimestampResponseMixin):
    id: uuid.UUID


class TranslationTreeResponse(SQLModel):
    success: bool = True
    data: dict[str, Any]
    lang: str


class TranslationBulkResponse(SQLModel):
    success: bool = True
    count: int


TranslationEnvelope = Envelope[TranslationPublic]
