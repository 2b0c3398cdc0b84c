from datetime import timezone
from typing import Optional
from dateutil.parser import parse, ParserError
from landing_cms.domain.exceptions import Conflict, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity, client_ts: Optional[str]) -> None:
    """
    Enforces optimistic locking using an If-Unmodified-Since value.
    Raises Conflict if the entity has been modified since.
    """
    if not client_ts:
        return  # No optimistic lock requested

    try:
        parsed = normalize_ts(parse(client_ts))
    except (ParserError, ValueError, OverflowError) as exc:
        raise ValidationError(
            "Invalid If-Unmodified-Since header",
            details={"If-Unmodified-Since": "must be an HTTP date or ISO8601 timestamp"},
        ) from exc

    if entity.updated_at is None:
        return

    server_ts = normalize_ts(entity.updated_at)
    if parsed.microsecond == 0:
        # HTTP dates carry whole seconds only
        server_ts = server_ts.replace(microsecond=0)

    if server_ts > parsed:
        raise Conflict("Conflict detected. Resource has been modified.")
