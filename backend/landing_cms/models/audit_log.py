from sqlalchemy import event
from landing_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

ENTITY_PAGE = "page"
ENTITY_MEDIA = "media"
ENTITY_CONTENT = "markdown_content"
ENTITY_TYPES = (ENTITY_PAGE, ENTITY_MEDIA, ENTITY_CONTENT)


class AuditLog(BaseModel, TenantMixin):
    """Who changed which page, upload or content entry, per tenant. Rows are append-only."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        db.Index("ix_audit_logs_tenant_created", "tenant_id", "created_at", "id"),
        db.Index("ix_audit_logs_tenant_entity", "tenant_id", "entity_type", "entity_id"),
    )

    # Null for system actions
    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(64), nullable=False, index=True)
    entity_type = db.Column(db.String(32), nullable=False)
    entity_id = db.Column(db.String(36), nullable=False)
    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(AuditLog, "before_update")
@event.listens_for(AuditLog, "before_delete")
def _reject_audit_changes(mapper, connection, target):
    raise RuntimeError(f"Audit log {target.id} cannot be modified")
