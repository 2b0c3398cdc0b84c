from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from landing_cms.extensions import db
from landing_cms.models.page import Page
from landing_cms.domain.exceptions import Conflict, NotFound, ValidationError
from landing_cms.domain.invariants.page import assert_page_payload
from landing_cms.domain.lifecycle.page import DRAFT
from landing_cms.models.audit_log import ENTITY_PAGE
from landing_cms.utils.audit import log_action
from landing_cms.utils.optimistic_lock import enforce_optimistic_lock
from landing_cms.utils.transaction import transactional
from landing_cms.utils.versioning import snapshot_page
from landing_cms.application._guards import require_editor


ALLOWED_UPDATE_FIELDS = ("title", "description", "layout", "seo")
IMMUTABLE_FIELDS = ("slug", "locale")


def update_page(
    *,
    tenant_id: str,
    page_id: str,
    actor,
    data: Dict[str, Any],
    if_unmodified_since: Optional[str] = None,
) -> Page:
    """
    Apply a partial edit to a page.

    Design rules:
    - The pre-edit state is snapshotted as the next version first
    - Any edit sends the page back to DRAFT, whatever it was
    - Slug and locale are fixed after creation
    - No silent no-op updates
    """
    require_editor(actor)

    immutable = [field for field in IMMUTABLE_FIELDS if field in data]
    if immutable:
        raise ValidationError(
            "Slug and locale cannot be changed",
            details={field: "is immutable" for field in immutable},
        )

    changes = {field: data[field] for field in ALLOWED_UPDATE_FIELDS if field in data}
    if not changes:
        raise ValidationError(
            "No valid fields provided for update",
            details={"fields": f"expected one of {', '.join(ALLOWED_UPDATE_FIELDS)}"},
        )

    assert_page_payload(
        changes,
        supported_locales=current_app.config["SUPPORTED_LOCALES"],
        partial=True,
    )

    attempts = max(1, current_app.config.get("VERSION_RETRY_ATTEMPTS", 3))

    for attempt in range(1, attempts + 1):
        try:
            return _apply_update(
                tenant_id=tenant_id,
                page_id=page_id,
                actor=actor,
                changes=changes,
                if_unmodified_since=if_unmodified_since,
            )
        except IntegrityError:
            # Another edit took the same version number; re-read and retry
            current_app.logger.warning(
                "Version collision on page %s (attempt %d/%d)", page_id, attempt, attempts
            )

    raise Conflict("Page is being edited concurrently, please retry")


def _apply_update(*, tenant_id, page_id, actor, changes, if_unmodified_since) -> Page:
    with transactional():
        # Row lock serialises snapshot+update per page where the backend supports it
        page = (
            db.session.execute(
                select(Page)
                .where(Page.id == page_id, Page.tenant_id == tenant_id)
                .with_for_update()
            )
            .scalar_one_or_none()
        )

        if not page:
            raise NotFound("Page not found")

        enforce_optimistic_lock(page, if_unmodified_since)

        previous_status = page.status
        version = snapshot_page(page, actor_id=actor.id)

        for field, value in changes.items():
            if field == "title":
                value = value.strip()
            if field == "seo":
                value = value or {}
            setattr(page, field, value)

        page.status = DRAFT
        # Preview tokens only live while STAGING
        page.preview_token = None

        log_action(
            tenant_id=tenant_id,
            actor_id=actor.id,
            action="page.update",
            entity_type=ENTITY_PAGE,
            entity_id=page.id,
            payload={
                "fields": sorted(changes),
                "version": version.version,
                "previous_status": previous_status,
            },
        )

    return page
