from typing import Any, Dict


def normalize_audit_log(entry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "action": entry.action,
        "entity": {
            "type": entry.entity_type,
            "id": entry.entity_id,
        },
        "actor_id": entry.actor_id,
        "payload": entry.payload or {},
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }
