"""Nested translation trees built from dot-delimited keys.

Translations are stored flat, one row per ``(key, language)``, with keys such
as ``"nav.home.title"``. Readers want them nested::

    {"nav": {"home": {"title": "Home"}}}

``aggregate`` builds that tree for one language. Keys whose paths collide
(``"a"`` and ``"a.b"``) are resolved last-write-wins and reported to the
diagnostic sink; malformed keys are skipped and reported, never raised.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union

from locals_api.core.logging import get_logger

logger = get_logger(__name__)

KEY_SEPARATOR = "."

TreeNode = dict[str, Union[str, "TreeNode"]]


class TranslationLike(Protocol):
    key: str
    language: str
    value: str


class InsertOutcome(str, Enum):
    INSERTED = "inserted"
    # An intermediate segment held a leaf, which became an empty node
    LEAF_REPLACED = "leaf_replaced"
    # The final segment held a subtree, which the leaf overwrote
    NODE_REPLACED = "node_replaced"
    EMPTY_SEGMENT = "empty_segment"


class DiagnosticReason(str, Enum):
    EMPTY_SEGMENT = "empty_segment"
    LANGUAGE_MISMATCH = "language_mismatch"
    LEAF_REPLACED = "leaf_replaced"
    NODE_REPLACED = "node_replaced"


@dataclass(frozen=True)
class KeyPathDiagnostic:
    key: str
    language: str
    reason: DiagnosticReason

    @property
    def skipped(self) -> bool:
        """True when the record did not make it into the tree."""
        return self.reason in (
            DiagnosticReason.EMPTY_SEGMENT,
            DiagnosticReason.LANGUAGE_MISMATCH,
        )


DiagnosticSink = Callable[[KeyPathDiagnostic], None]


def split_key(key: str) -> list[str]:
    return key.split(KEY_SEPARATOR)


class TranslationTree:
    """Mutable nested mapping of path segments to leaf strings or subtrees."""

    def __init__(self) -> None:
        self._root: TreeNode = {}

    def insert(self, segments: Sequence[str], value: str) -> InsertOutcome:
        """Place ``value`` at the path given by ``segments``.

        Nothing is written when any segment is empty. A leaf met on the way
        down is replaced by an empty node; a subtree at the final segment is
        replaced by the leaf. The outcome says which of these happened.
        """
        if not segments or any(not segment for segment in segments):
            return InsertOutcome.EMPTY_SEGMENT

        outcome = InsertOutcome.INSERTED
        node = self._root
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None:
                    outcome = InsertOutcome.LEAF_REPLACED
                child = {}
                node[segment] = child
            node = child

        last = segments[-1]
        if isinstance(node.get(last), dict) and outcome is InsertOutcome.INSERTED:
            outcome = InsertOutcome.NODE_REPLACED
        node[last] = value
        return outcome

    def to_dict(self) -> TreeNode:
        return self._root


def _log_diagnostic(diagnostic: KeyPathDiagnostic) -> None:
    event = (
        "translation_key_skipped" if diagnostic.skipped else "translation_key_conflict"
    )
    logger.warning(
        event,
        key=diagnostic.key,
        language=diagnostic.language,
        reason=diagnostic.reason.value,
    )


_OUTCOME_REASONS: dict[InsertOutcome, DiagnosticReason] = {
    InsertOutcome.EMPTY_SEGMENT: DiagnosticReason.EMPTY_SEGMENT,
    InsertOutcome.LEAF_REPLACED: DiagnosticReason.LEAF_REPLACED,
    InsertOutcome.NODE_REPLACED: DiagnosticReason.NODE_REPLACED,
}


def aggregate(
    records: Iterable[TranslationLike],
    language: str,
    on_diagnostic: DiagnosticSink | None = None,
) -> dict[str, Any]:
    """Build the nested translation tree for ``language``.

    Args:
        records: Translations in store order, normally already filtered to
            ``language``
        language: Language the tree is built for; records in any other
            language are left out
        on_diagnostic: Receives one ``KeyPathDiagnostic`` per skipped or
            conflicting record. Defaults to logging a warning.

    Returns:
        Nested dict of path segments to translated strings. The same ordered
        input always yields the same tree.
    """
    sink = on_diagnostic or _log_diagnostic
    tree = TranslationTree()

    for record in records:
        if record.language != language:
            sink(
                KeyPathDiagnostic(
                    record.key, record.language, DiagnosticReason.LANGUAGE_MISMATCH
                )
            )
            continue

        outcome = tree.insert(split_key(record.key), record.value)
        reason = _OUTCOME_REASONS.get(outcome)
        if reason is not None:
            sink(KeyPathDiagnostic(record.key, record.language, reason))

    return tree.to_dict()
