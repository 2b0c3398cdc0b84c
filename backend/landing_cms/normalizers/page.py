from typing import Any, Callable, Dict, List, Optional


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def normalize_layout(
    layout: List[Dict[str, Any]],
    render: Optional[Callable[[str], Optional[str]]] = None,
) -> List[Dict[str, Any]]:
    """
    Return layout blocks in stored order.

    With ``render``, markdown blocks get an extra ``html`` key resolved
    from their content key; other blocks pass through untouched.
    """
    blocks = []
    for block in layout or []:
        block = dict(block)
        if render and block.get("type") == "markdown":
            key = (block.get("content") or {}).get("key")
            block["html"] = render(key) if key else None
        blocks.append(block)
    return blocks


def normalize_page(page, admin=False, render=None):
    data = {
        "id": page.id,
        "slug": page.slug,
        "locale": page.locale,
        "title": page.title,
        "description": page.description,
        "seo": page.seo or {},
        "layout": normalize_layout(page.layout, render=render),
    }

    if admin:
        data.update({
            "status": page.status,
            "preview_token": page.preview_token,
            "staged_at": _iso(page.staged_at),
            "published_at": _iso(page.published_at),
            "created_at": _iso(page.created_at),
            "updated_at": _iso(page.updated_at),
        })
    else:
        data["published_at"] = _iso(page.published_at)

    return data


def normalize_version(version):
    return {
        "id": version.id,
        "page_id": version.page_id,
        "version": version.version,
        "title": version.title,
        "status": version.status,
        "layout": version.layout or [],
        "created_by": version.created_by,
        "created_at": _iso(version.created_at),
    }
