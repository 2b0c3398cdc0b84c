from typing import Any, Dict
from flask import current_app
from sqlalchemy.exc import IntegrityError
from landing_cms.extensions import db
from landing_cms.models.page import Page
from landing_cms.domain.exceptions import Conflict
from landing_cms.domain.invariants.page import assert_page_payload
from landing_cms.domain.lifecycle.page import DRAFT
from landing_cms.models.audit_log import ENTITY_PAGE
from landing_cms.utils.audit import log_action
from landing_cms.utils.transaction import transactional
from landing_cms.application._guards import require_editor


def create_page(
    *,
    tenant_id: str,
    actor,
    data: Dict[str, Any],
) -> Page:
    """
    Create a new page in DRAFT state.

    Edge cases handled:
    - Missing slug/title, unsupported locale, malformed layout
    - Duplicate (slug, locale) within the tenant
    """
    require_editor(actor)

    data = dict(data)
    data.setdefault("locale", current_app.config["DEFAULT_LOCALE"])
    data.setdefault("layout", [])

    assert_page_payload(data, supported_locales=current_app.config["SUPPORTED_LOCALES"])

    existing = Page.query.filter_by(
        tenant_id=tenant_id,
        slug=data["slug"],
        locale=data["locale"],
    ).first()
    if existing:
        raise Conflict("Page with this slug and locale already exists")

    page = Page()
    page.tenant_id = tenant_id
    page.slug = data["slug"]
    page.locale = data["locale"]
    page.title = data["title"].strip()
    page.description = data.get("description")
    page.layout = data["layout"]
    page.seo = data.get("seo") or {}
    page.status = DRAFT

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()  # ensures page.id is available

            log_action(
                tenant_id=tenant_id,
                actor_id=actor.id,
                action="page.create",
                entity_type=ENTITY_PAGE,
                entity_id=page.id,
                payload={
                    "slug": page.slug,
                    "locale": page.locale,
                    "status": page.status,
                },
            )

        current_app.logger.info("Created page %s (%s/%s) for tenant %s", page.id, page.locale, page.slug, tenant_id)
        return page

    except IntegrityError as exc:
        # Lost a race against a concurrent create on (tenant_id, slug, locale)
        raise Conflict("Page with this slug and locale already exists") from exc
