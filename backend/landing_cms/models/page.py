from landing_cms.extensions import db
from landing_cms.domain.lifecycle.page import DRAFT
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Page(BaseModel, TenantMixin):
    __tablename__ = 'pages'

    slug = db.Column(db.String(200), nullable=False, index=True)
    locale = db.Column(db.String(10), nullable=False, default="es-CO")
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Ordered list of {id, type, content} blocks
    layout = db.Column(db.JSON, nullable=False, default=list)
    seo = db.Column(db.JSON(none_as_null=True), default=dict)

    status = db.Column(db.String(20), nullable=False, default=DRAFT, index=True)
    staged_at = db.Column(db.DateTime(timezone=True), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    preview_token = db.Column(db.String(64), nullable=True, index=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", "locale", name="uq_page_slug_locale_per_tenant"),
    )

    # Versions go with the page on hard delete
    versions = db.relationship(
        "PageVersion",
        back_populates="page",
        order_by="PageVersion.version",
        cascade="all, delete-orphan",
    )
