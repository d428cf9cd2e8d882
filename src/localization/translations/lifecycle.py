"""Translation status state machine.

    draft ──> reviewed ──> published ──> archived
      └───────────────────────^             ^
      any state ────────────────────────────┘

Archived is terminal. Draft is only re-entered through a fresh upsert,
never through a status edit, so changed content always goes back through
review and publication.
"""

from localization.core.base_models import utcnow
from localization.core.exceptions import ValidationError
from localization.translations.models import TranslationEntry, TranslationStatus

ALLOWED_TRANSITIONS: dict[TranslationStatus, frozenset[TranslationStatus]] = {
    TranslationStatus.DRAFT: frozenset(
        {
            TranslationStatus.REVIEWED,
            TranslationStatus.PUBLISHED,
            TranslationStatus.ARCHIVED,
        }
    ),
    TranslationStatus.REVIEWED: frozenset(
        {TranslationStatus.PUBLISHED, TranslationStatus.ARCHIVED}
    ),
    TranslationStatus.PUBLISHED: frozenset({TranslationStatus.ARCHIVED}),
    TranslationStatus.ARCHIVED: frozenset(),
}

# Statuses the publication controller moves to published
PUBLISHABLE_STATUSES: frozenset[TranslationStatus] = frozenset(
    {TranslationStatus.DRAFT, TranslationStatus.REVIEWED}
)


def can_transition(current: TranslationStatus, target: TranslationStatus) -> bool:
    return current == target or target in ALLOWED_TRANSITIONS[current]


def transition_status(
    entry: TranslationEntry,
    target: TranslationStatus,
    actor: str | None = None,
) -> TranslationEntry:
    """Move `entry` to `target` in memory, applying the side effects of the
    new status. Persisting is the caller's job.

    Re-applying the current status is a no-op.

    Raises:
        ValidationError: The state machine forbids the transition
    """
    current = entry.status
    if current == target:
        return entry
    if not can_transition(current, target):
        raise ValidationError(
            f"Cannot change status from {current.value} to {target.value}",
            field="status",
        )

    now = utcnow()
    entry.status = target
    entry.updated_at = now

    if target == TranslationStatus.REVIEWED:
        entry.reviewed_by = actor
        entry.reviewed_at = now
    elif target == TranslationStatus.PUBLISHED:
        if entry.published_at is None:
            entry.published_at = now
    elif target == TranslationStatus.ARCHIVED:
        entry.is_active = False

    return entry
