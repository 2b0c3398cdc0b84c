from typing import List
from sqlalchemy import func
from landing_cms.extensions import db
from landing_cms.models.page_version import PageVersion


def next_version(page_id: str, tenant_id: str) -> int:
    last = (
        db.session.query(func.max(PageVersion.version))
        .filter(PageVersion.page_id == page_id, PageVersion.tenant_id == tenant_id)
        .scalar()
    )
    return (last or 0) + 1


def snapshot_page(page, *, actor_id: str | None = None) -> PageVersion:
    """
    Record the page's current (pre-edit) state as the next version.

    Must run inside the caller's transaction, after the page row has been
    locked. The (page_id, version) unique constraint rejects a concurrent
    writer that computed the same number; callers retry on IntegrityError.
    """
    version = PageVersion()
    version.page_id = page.id
    version.tenant_id = page.tenant_id
    version.version = next_version(page.id, page.tenant_id)
    version.title = page.title
    version.layout = list(page.layout or [])
    version.status = page.status
    version.created_by = actor_id

    db.session.add(version)
    db.session.flush()  # surfaces uniqueness violations inside the transaction

    return version


def list_versions(page_id: str, tenant_id: str) -> List[PageVersion]:
    return (
        PageVersion.query
        .filter_by(page_id=page_id, tenant_id=tenant_id)
        .order_by(PageVersion.version.desc())
        .all()
    )
