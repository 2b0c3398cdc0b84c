from landing_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class MarkdownContent(BaseModel, TenantMixin):
    __tablename__ = "markdown_contents"

    key = db.Column(db.String(200), nullable=False)
    locale = db.Column(db.String(10), nullable=False, default="es-CO")

    # Raw markdown; HTML is rendered per read and never stored
    content = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "key", "locale", name="uq_markdown_key_locale_per_tenant"),
    )
