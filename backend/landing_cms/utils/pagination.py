import base64
import binascii
from datetime import datetime
from typing import Any, List, Optional, Tuple, TypedDict
from sqlalchemy import and_, or_
from landing_cms.domain.exceptions import ValidationError

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: str) -> str:
    """Opaque URL-safe cursor for the (created_at, id) sort key."""
    raw = f"{created_at.isoformat()}|{row_id}".encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        ts_str, row_id = base64.urlsafe_b64decode(padded).decode().split("|", 1)
        return datetime.fromisoformat(ts_str), row_id
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise ValidationError("Invalid cursor", details={"cursor": "malformed"}) from exc


def parse_limit(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_LIMIT
    try:
        limit = int(raw)
    except ValueError as exc:
        raise ValidationError("Invalid limit", details={"limit": "must be an integer"}) from exc
    if limit < 1:
        raise ValidationError("Invalid limit", details={"limit": "must be at least 1"})
    return min(limit, MAX_LIMIT)


def paginate_cursor(query, *, model, cursor: Optional[str], limit: int) -> Tuple[List[Any], CursorMeta]:
    """
    Newest-first keyset pagination over ``model.created_at`` then ``model.id``.

    One extra row is fetched to know whether another page exists.
    """
    if cursor:
        after_ts, after_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < after_ts,
                and_(model.created_at == after_ts, model.id < after_id),
            )
        )

    rows = query.order_by(model.created_at.desc(), model.id.desc()).limit(limit + 1).all()
    items = rows[:limit]
    has_more = len(rows) > limit

    meta: CursorMeta = {"has_more": has_more, "next_cursor": None}
    if has_more:
        meta["next_cursor"] = encode_cursor(items[-1].created_at, items[-1].id)
    return items, meta
