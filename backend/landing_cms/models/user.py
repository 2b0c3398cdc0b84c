from werkzeug.security import generate_password_hash, check_password_hash
from landing_cms.extensions import db
from .base import BaseModel

ROLE_SUPER_ADMIN = "SUPER_ADMIN"
ROLE_EDITOR = "EDITOR"
ROLE_VIEWER = "VIEWER"
ROLES = (ROLE_SUPER_ADMIN, ROLE_EDITOR, ROLE_VIEWER)

# Roles allowed to mutate content (anything above VIEWER)
CONTENT_ROLES = (ROLE_SUPER_ADMIN, ROLE_EDITOR)

class User(BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default=ROLE_VIEWER)
    is_active = db.Column(db.Boolean, default=True)

    # SUPER_ADMIN accounts are not bound to a tenant
    tenant_id = db.Column(
        db.String(36),
        db.ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
