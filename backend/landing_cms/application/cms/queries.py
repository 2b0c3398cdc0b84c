from typing import List, Optional
from landing_cms.models.page import Page
from landing_cms.models.page_version import PageVersion
from landing_cms.domain.exceptions import NotFound, ValidationError
from landing_cms.domain.lifecycle.page import PAGE_STATUSES, PUBLISHED, STAGING
from landing_cms.utils.versioning import list_versions


def get_page(*, tenant_id: str, page_id: str) -> Page:
    page = Page.query.filter_by(id=page_id, tenant_id=tenant_id).first()
    if not page:
        raise NotFound("Page not found")
    return page


def list_pages(*, tenant_id: str, locale: str, status: Optional[str] = None) -> List[Page]:
    if status is not None and status not in PAGE_STATUSES:
        raise ValidationError(
            "Invalid status filter",
            details={"status": f"must be one of {', '.join(PAGE_STATUSES)}"},
        )

    query = Page.query.filter_by(tenant_id=tenant_id, locale=locale)
    if status:
        query = query.filter_by(status=status)

    return query.order_by(Page.updated_at.desc(), Page.id.desc()).all()


def get_published_page(*, tenant_id: str, slug: str, locale: str) -> Page:
    page = Page.query.filter_by(
        tenant_id=tenant_id,
        slug=slug,
        locale=locale,
        status=PUBLISHED,
    ).first()
    if not page:
        raise NotFound("Page not found")
    return page


def get_preview_page(*, tenant_id: str, token: Optional[str], slug: Optional[str]) -> Page:
    """
    Resolve staged content for an unauthenticated preview link.

    Any miss is a 404 so probes cannot tell a bad token from a missing page.
    """
    if not token or not slug:
        raise NotFound("Page not found")

    page = Page.query.filter_by(
        tenant_id=tenant_id,
        slug=slug,
        preview_token=token,
        status=STAGING,
    ).first()
    if not page:
        raise NotFound("Page not found")
    return page


def get_page_versions(*, tenant_id: str, page_id: str) -> List[PageVersion]:
    # Existence check keeps other tenants' page ids a 404
    page = get_page(tenant_id=tenant_id, page_id=page_id)
    return list_versions(page.id, tenant_id)
