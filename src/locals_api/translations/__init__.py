from locals_api.translations.crud import (
    bulk_create_translations,
    create_translation,
    delete_translation,
    get_translation,
    get_translation_tree,
    update_translation,
)
from locals_api.translations.models import (
    Translation,
    TranslationBase,
    TranslationBulkCreate,
    TranslationBulkResponse,
    TranslationCreate,
    TranslationEnvelope,
    TranslationPublic,
    TranslationTreeResponse,
    TranslationUpdate,
)
from locals_api.translations.tree import (
    DiagnosticReason,
    KeyPathDiagnostic,
    TranslationTree,
    aggregate,
)

__all__ = [
    # Models
    "Translation",
    "TranslationBase",
    "TranslationBulkCreate",
    "TranslationBulkResponse",
    "TranslationCreate",
    "TranslationEnvelope",
    "TranslationPublic",
    "TranslationTreeResponse",
    "TranslationUpdate",
    # Tree building
    "DiagnosticReason",
    "KeyPathDiagnostic",
    "TranslationTree",
    "aggregate",
    # CRUD
    "bulk_create_translations",
    "create_translation",
    "delete_translation",
    "get_translation",
    "get_translation_tree",
    "update_translation",
]
