from typing import Annotated, Any

from fastapi import APIRouter, Query, status

from locals_api.auth import AdminUser, SessionDep
from locals_api.core.base_models import SuccessResponse
from locals_api.core.logging import get_logger
from locals_api.translations import (
    TranslationBulkCreate,
    TranslationBulkResponse,
    TranslationCreate,
    TranslationEnvelope,
    TranslationPublic,
    TranslationTreeResponse,
    TranslationUpdate,
    bulk_create_translations,
    create_translation,
    delete_translation,
    get_translation_tree,
    update_translation,
)

router = APIRouter(prefix="/translations", tags=["translations"])
logger = get_logger(__name__)

# Optional at the HTTP layer; the CRUD functions reject missing values
KeyQuery = Annotated[str | None, Query(description="Dot-delimited translation key")]
LanguageQuery = Annotated[str | None, Query(description="Language code, e.g. 'en'")]


@router.get("", response_model=TranslationTreeResponse)
def read_translations(
    session: SessionDep,
    lang: LanguageQuery = None,
) -> Any:
    """Get every translation of a language as a nested tree.

    Keys are split on dots, so ``nav.home.title`` ends up under
    ``data["nav"]["home"]["title"]``.
    """
    tree = get_translation_tree(session=session, language=lang)
    return TranslationTreeResponse(data=tree, lang=lang)


@router.post(
    "",
    response_model=TranslationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def create_translation_endpoint(
    session: SessionDep,
    admin: AdminUser,
    translation_in: TranslationCreate,
) -> Any:
    """Create a translation (admin only)."""
    translation = create_translation(session=session, translation_in=translation_in)
    return TranslationEnvelope(data=TranslationPublic.model_validate(translation))


@router.post(
    "/bulk",
    response_model=TranslationBulkResponse,
    status_code=status.HTTP_201_CREATED,
)
def bulk_create_translations_endpoint(
    session: SessionDep,
    admin: AdminUser,
    payload: TranslationBulkCreate,
) -> Any:
    """Create many translations at once (admin only).

    Keys that already exist for their language are skipped; ``count`` is the
    number actually created.
    """
    count = bulk_create_translations(session=session, items=payload.items)
    return TranslationBulkResponse(count=count)


@router.put("", response_model=TranslationEnvelope)
def update_translation_endpoint(
    session: SessionDep,
    admin: AdminUser,
    translation_in: TranslationUpdate,
    key: KeyQuery = None,
) -> Any:
    """Update the translation at ``key`` in the body's language (admin only)."""
    translation = update_translation(
        session=session, key=key, translation_in=translation_in
    )
    logger.info(
        "translation_updated",
        key=translation.key,
        language=translation.language,
        admin_id=str(admin.id),
    )
    return TranslationEnvelope(data=TranslationPublic.model_validate(translation))


@router.delete("", response_model=SuccessResponse)
def delete_translation_endpoint(
    session: SessionDep,
    admin: AdminUser,
    key: KeyQuery = None,
    language: LanguageQuery = None,
) -> Any:
    """Delete the translation at ``key`` in ``language`` (admin only)."""
    delete_translation(session=session, key=key, language=language)
    return SuccessResponse()
