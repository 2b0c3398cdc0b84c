from typing import Any, Dict, Optional
from flask import current_app
from landing_cms.extensions import db
from landing_cms.models.audit_log import AuditLog, ENTITY_TYPES


def log_action(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: str,
    payload: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """Stage an audit row; it commits or rolls back with the caller's transaction."""
    if entity_type not in ENTITY_TYPES:
        raise ValueError(f"Unknown audit entity type: {entity_type}")

    entry = AuditLog(
        tenant_id=tenant_id,
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        payload=payload or {},
    )
    db.session.add(entry)

    current_app.logger.debug("audit %s %s:%s by %s", action, entity_type, entity_id, actor_id)
    return entry
