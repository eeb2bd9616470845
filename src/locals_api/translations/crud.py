from collections.abc import Sequence
from typing import Any

from sqlmodel import Session

from locals_api.core.exceptions import (
    InvalidInputError,
    ResourceExistsError,
    ResourceNotFoundError,
    from_repository_error,
)
from locals_api.core.logging import get_logger
from locals_api.core.repository import Repository, RepositoryError
from locals_api.translations.models import (
    Translation,
    TranslationCreate,
    TranslationUpdate,
)
from locals_api.translations.tree import DiagnosticSink, aggregate

logger = get_logger(__name__)

UNIQUE_KEY_DESCRIPTION = "key and language"


def _translations(session: Session) -> Repository[Translation]:
    return Repository(session, Translation, unique_fields=("key", "language"))


def _require(value: str | None, field: str) -> str:
    if not value:
        raise InvalidInputError(f"{field.capitalize()} parameter is required", field=field)
    return value


def get_translation_tree(
    *,
    session: Session,
    language: str | None,
    on_diagnostic: DiagnosticSink | None = None,
) -> dict[str, Any]:
    """Load one language's translations as a nested tree.

    Raises:
        InvalidInputError: If no language is given
    """
    language = _require(language, "language")
    records = _translations(session).find_many(
        Translation.language == language, order_by=Translation.created_at
    )
    return aggregate(records, language, on_diagnostic)


def get_translation(*, session: Session, key: str, language: str) -> Translation | None:
    return _translations(session).find_one(
        Translation.key == key, Translation.language == language
    )


def create_translation(
    *, session: Session, translation_in: TranslationCreate
) -> Translation:
    """Create one translation.

    Raises:
        ResourceExistsError: If the key already exists for the language
    """
    existing = get_translation(
        session=session, key=translation_in.key, language=translation_in.language
    )
    if existing:
        raise ResourceExistsError("Translation", UNIQUE_KEY_DESCRIPTION)

    try:
        translation = _translations(session).create(translation_in)
    except RepositoryError as e:
        raise from_repository_error(
            e,
            resource="Translation",
            unique_field=UNIQUE_KEY_DESCRIPTION,
            operation="create",
        ) from e

    logger.info(
        "translation_created", key=translation.key, language=translation.language
    )
    return translation


def bulk_create_translations(
    *, session: Session, items: Sequence[TranslationCreate]
) -> int:
    """Insert many translations, silently skipping existing keys.

    Returns:
        Number of translations actually inserted

    Raises:
        InvalidInputError: If items is empty
    """
    if not items:
        raise InvalidInputError("Items must be a non-empty array", field="items")

    try:
        count = _translations(session).create_many(items, skip_duplicates=True)
    except RepositoryError as e:
        raise from_repository_error(
            e,
            resource="Translation",
            unique_field=UNIQUE_KEY_DESCRIPTION,
            operation="create",
        ) from e

    logger.info("translations_bulk_created", submitted=len(items), created=count)
    return count


def update_translation(
    *, session: Session, key: str | None, translation_in: TranslationUpdate
) -> Translation:
    """Replace the fields of the translation stored under key + language.

    Raises:
        InvalidInputError: If no key is given
        ResourceNotFoundError: If no translation matches
    """
    key = _require(key, "key")
    translation = get_translation(
        session=session, key=key, language=translation_in.language
    )
    if not translation:
        raise ResourceNotFoundError("Translation")

    translation_data = translation_in.model_dump(exclude_unset=True, exclude_none=True)
    try:
        return _translations(session).update(translation, translation_data)
    except RepositoryError as e:
        raise from_repository_error(
            e,
            resource="Translation",
            unique_field=UNIQUE_KEY_DESCRIPTION,
            operation="update",
        ) from e


def delete_translation(
    *, session: Session, key: str | None, language: str | None
) -> None:
    """Delete the translation stored under key + language.

    Raises:
        InvalidInputError: If key or language is missing
        ResourceNotFoundError: If no translation matches
    """
    key = _require(key, "key")
    language = _require(language, "language")
    translation = get_translation(session=session, key=key, language=language)
    if not translation:
        raise ResourceNotFoundError("Translation")

    try:
        _translations(session).delete(translation)
    except RepositoryError as e:
        raise from_repository_error(e, resource="Translation", operation="delete") from e
    logger.info("translation_deleted", key=key, language=language)
