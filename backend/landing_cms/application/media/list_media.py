from typing import Optional
from landing_cms.models.media import Media, MEDIA_TYPES, SCAN_CLEAN
from landing_cms.utils.pagination import paginate_cursor


def list_media(
    *,
    tenant_id: str,
    type_filter: Optional[str] = None,
    cursor: Optional[str] = None,
    limit: int = 20,
):
    """
    Newest-first media visible to consumers.

    Only scanned, clean records are returned; pending or infected uploads
    stay in storage but never show up here. Unknown type filters are
    ignored.
    """
    query = Media.query.filter(
        Media.tenant_id == tenant_id,
        Media.scanned.is_(True),
        Media.scan_status == SCAN_CLEAN,
    )

    if type_filter in MEDIA_TYPES:
        query = query.filter(Media.type == type_filter)

    return paginate_cursor(query, model=Media, cursor=cursor, limit=limit)
