from landing_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

MEDIA_IMAGE = "IMAGE"
MEDIA_DOCUMENT = "DOCUMENT"
MEDIA_TYPES = (MEDIA_IMAGE, MEDIA_DOCUMENT)

SCAN_PENDING = "pending"
SCAN_CLEAN = "clean"
SCAN_INFECTED = "infected"

class Media(BaseModel, TenantMixin):
    __tablename__ = "media"

    __table_args__ = (
        db.Index("ix_media_visible", "tenant_id", "scanned", "scan_status", "created_at"),
    )

    filename = db.Column(db.String(255), nullable=False, unique=True)
    original_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(100), nullable=False)
    size = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(20), nullable=False, index=True)

    # Relative to the blob storage root
    path = db.Column(db.String(512), nullable=False)
    thumbnail_path = db.Column(db.String(512), nullable=True)
    webp_path = db.Column(db.String(512), nullable=True)

    width = db.Column(db.Integer, nullable=True)
    height = db.Column(db.Integer, nullable=True)

    uploaded_by = db.Column(db.String(36), nullable=False)

    scanned = db.Column(db.Boolean, nullable=False, default=False)
    scan_status = db.Column(db.String(20), nullable=False, default=SCAN_PENDING)
