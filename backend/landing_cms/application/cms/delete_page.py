from landing_cms.extensions import db
from landing_cms.models.page import Page
from landing_cms.domain.exceptions import NotFound
from landing_cms.models.audit_log import ENTITY_PAGE
from landing_cms.utils.audit import log_action
from landing_cms.utils.transaction import transactional
from landing_cms.application._guards import require_editor


def delete_page(
    *,
    tenant_id: str,
    page_id: str,
    actor,
) -> None:
    """
    Hard-delete a page.

    Notes:
    - Version snapshots are cascade-deleted with the page
    - Media referenced by the layout is left alone
    """
    require_editor(actor)

    page = Page.query.filter_by(
        id=page_id,
        tenant_id=tenant_id,
    ).first()

    if not page:
        raise NotFound("Page not found")

    with transactional():
        version_count = len(page.versions)
        db.session.delete(page)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor.id,
            action="page.delete",
            entity_type=ENTITY_PAGE,
            entity_id=page_id,
            payload={
                "slug": page.slug,
                "locale": page.locale,
                "versions_deleted": version_count,
            },
        )
