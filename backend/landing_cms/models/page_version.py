from landing_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class PageVersion(BaseModel, TenantMixin):
    __tablename__ = "page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False
    )

    version = db.Column(db.Integer, nullable=False)

    # Pre-edit state of the page
    title = db.Column(db.String(200), nullable=False)
    layout = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(20), nullable=False)

    created_by = db.Column(db.String(36), nullable=True)

    page = db.relationship("Page", back_populates="versions")

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_page_version"),
        db.Index("idx_page_version_page", "page_id"),
    )
