# landing_cms/application/cms/publish_page.py
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlencode
from sqlalchemy import select
from flask import current_app
from landing_cms.extensions import db
from landing_cms.models.page import Page
from landing_cms.domain.exceptions import NotFound, ValidationError
from landing_cms.domain.lifecycle.page import (
    ENV_PRODUCTION,
    ENV_STAGING,
    PUBLISH_ENVIRONMENTS,
    assert_page_transition,
)
from landing_cms.models.audit_log import ENTITY_PAGE
from landing_cms.utils.audit import log_action
from landing_cms.utils.revalidation import revalidate_paths
from landing_cms.utils.transaction import transactional
from landing_cms.application._guards import require_editor

PREVIEW_TOKEN_BYTES = 24  # 32 URL-safe characters
PREVIEW_PATH = "/api/v1/preview"


@dataclass
class PublishResult:
    page: Page
    preview_url: Optional[str] = None


def generate_preview_token() -> str:
    return secrets.token_urlsafe(PREVIEW_TOKEN_BYTES)


def build_preview_url(token: str, slug: str) -> str:
    return f"{PREVIEW_PATH}?{urlencode({'token': token, 'slug': slug})}"


def publish_page(
    *,
    tenant_id: str,
    page_id: str,
    environment: str,
    actor,
) -> PublishResult:
    """
    Publishes a page to staging or production.

    Responsibilities:
    - transactional boundary
    - lifecycle transition enforcement
    - preview token issue (staging) / revocation (production)
    - cache revalidation after commit (production, best effort)
    - audit logging
    """
    require_editor(actor)

    if not isinstance(environment, str) or environment not in PUBLISH_ENVIRONMENTS:
        raise ValidationError(
            'Invalid environment. Must be "staging" or "production"',
            details={"environment": "must be one of staging, production"},
        )

    to_status = PUBLISH_ENVIRONMENTS[environment]

    with transactional():
        # 1️⃣ Fetch page with row-level lock
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

        # 2️⃣ Lifecycle transition enforcement
        from_status = page.status
        assert_page_transition(from_status=from_status, to_status=to_status)

        # 3️⃣ Apply state change
        now = datetime.now(timezone.utc)
        page.status = to_status

        if environment == ENV_STAGING:
            page.staged_at = now
            page.preview_token = generate_preview_token()
        else:
            page.published_at = now
            page.preview_token = None  # staged previews die with production

        # 4️⃣ Audit logging
        log_action(
            tenant_id=tenant_id,
            actor_id=actor.id,
            action=f"page.publish.{environment}",
            entity_type=ENTITY_PAGE,
            entity_id=page.id,
            payload={"from_status": from_status, "to_status": to_status},
        )

    current_app.logger.info("Page %s published to %s by %s", page.id, environment, actor.id)

    if environment == ENV_PRODUCTION:
        # 5️⃣ Outside the transaction: the database is the source of truth
        failed = revalidate_paths([f"/{page.slug}", f"/{page.locale}/{page.slug}"])
        if failed:
            _record_revalidation_failure(page, failed, actor)
        return PublishResult(page=page)

    return PublishResult(page=page, preview_url=build_preview_url(page.preview_token, page.slug))


def _record_revalidation_failure(page: Page, paths, actor) -> None:
    try:
        with transactional():
            log_action(
                tenant_id=page.tenant_id,
                actor_id=actor.id,
                action="cache.revalidate_failed",
                entity_type=ENTITY_PAGE,
                entity_id=page.id,
                payload={"paths": list(paths)},
            )
    except Exception:
        current_app.logger.exception("Could not record revalidation failure for page %s", page.id)
