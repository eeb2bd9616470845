"""Tests for the repository capability and its error classification."""

import pytest
from sqlalchemy.exc import IntegrityError

from locals_api.core.exceptions import (
    ErrorKind,
    InternalError,
    ResourceExistsError,
    from_repository_error,
)
from locals_api.core.repository import (
    Repository,
    RepositoryError,
    RepositoryErrorKind,
    classify_integrity_error,
)
from locals_api.products.models import Product, ProductCreate
from locals_api.translations.models import Translation, TranslationCreate


class DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, DriverError(message, sqlstate))


class TestClassifyIntegrityError:
    @pytest.mark.parametrize(
        "error, kind",
        [
            (integrity_error("duplicate key", "23505"), RepositoryErrorKind.UNIQUE_VIOLATION),
            (integrity_error("violates fk", "23503"), RepositoryErrorKind.FOREIGN_KEY_VIOLATION),
            (
                integrity_error("UNIQUE constraint failed: product.code"),
                RepositoryErrorKind.UNIQUE_VIOLATION,
            ),
            (
                integrity_error("FOREIGN KEY constraint failed"),
                RepositoryErrorKind.FOREIGN_KEY_VIOLATION,
            ),
            (integrity_error("NOT NULL constraint failed"), RepositoryErrorKind.UNKNOWN),
        ],
    )
    def test_kinds(self, error, kind):
        assert classify_integrity_error(error) is kind


class TestFromRepositoryError:
    def test_unique_becomes_conflict(self):
        error = RepositoryError(RepositoryErrorKind.UNIQUE_VIOLATION, "product")
        mapped = from_repository_error(error, resource="Product", unique_field="code")

        assert isinstance(mapped, ResourceExistsError)
        assert mapped.status_code == 409

    def test_foreign_key_becomes_invalid_input(self):
        error = RepositoryError(RepositoryErrorKind.FOREIGN_KEY_VIOLATION, "product")
        mapped = from_repository_error(error, resource="Product", operation="delete")

        assert mapped.kind is ErrorKind.INVALID_INPUT
        assert mapped.message == "Cannot delete product: it is referenced by other records"

    def test_unknown_hides_engine_details(self):
        error = RepositoryError(RepositoryErrorKind.UNKNOWN, "product")
        mapped = from_repository_error(error, resource="Product", operation="create")

        assert isinstance(mapped, InternalError)
        assert mapped.message == "Failed to create product"


def product(code: str) -> ProductCreate:
    return ProductCreate(
        name=f"Product {code}",
        code=code,
        unit="pcs",
        in_price=1.0,
        price=2.0,
        vat=25.0,
        currency="EUR",
        stock=1,
    )


class TestRepository:
    def test_create_and_find(self, session):
        products = Repository(session, Product, unique_fields=("code",))
        created = products.create(product("P1"))

        assert products.get(created.id).code == "P1"
        assert products.find_one(Product.code == "P1").id == created.id
        assert products.count() == 1

    def test_duplicate_unique_field_raises_and_rolls_back(self, session):
        products = Repository(session, Product, unique_fields=("code",))
        products.create(product("P1"))

        with pytest.raises(RepositoryError) as exc_info:
            products.create(product("P1"))

        assert exc_info.value.kind is RepositoryErrorKind.UNIQUE_VIOLATION
        # The session is usable again after the rollback
        products.create(product("P2"))
        assert products.count() == 2

    def test_update_bumps_updated_at(self, session):
        products = Repository(session, Product)
        created = products.create(product("P1"))
        before = created.updated_at

        updated = products.update(created, {"stock": 7})

        assert updated.stock == 7
        assert updated.updated_at >= before

    def test_create_many_skips_existing_and_repeated_keys(self, session):
        translations = Repository(
            session, Translation, unique_fields=("key", "language")
        )
        translations.create(TranslationCreate(key="a", language="en", value="A"))

        count = translations.create_many(
            [
                TranslationCreate(key="a", language="en", value="again"),
                TranslationCreate(key="a", language="sv", value="A-sv"),
                TranslationCreate(key="b", language="en", value="B"),
                TranslationCreate(key="b", language="en", value="B twice"),
            ],
            skip_duplicates=True,
        )

        assert count == 2
        assert translations.count() == 3
        stored = translations.find_one(
            Translation.key == "a", Translation.language == "en"
        )
        assert stored.value == "A"

    def test_create_many_without_skipping_fails_whole_batch(self, session):
        translations = Repository(
            session, Translation, unique_fields=("key", "language")
        )
        translations.create(TranslationCreate(key="a", language="en", value="A"))

        with pytest.raises(RepositoryError):
            translations.create_many(
                [
                    TranslationCreate(key="b", language="en", value="B"),
                    TranslationCreate(key="a", language="en", value="dup"),
                ]
            )

        assert translations.count() == 1
