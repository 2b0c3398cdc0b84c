from landing_cms.extensions import db
from .base import BaseModel

class Tenant(BaseModel):
    __tablename__ = "tenants"

    name = db.Column(db.String(255), nullable=False)
    domain = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Branding
    logo_url = db.Column(db.String(512), nullable=True)
    primary_color = db.Column(db.String(16), nullable=True)
    secondary_color = db.Column(db.String(16), nullable=True)
    font_family = db.Column(db.String(128), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "domain": self.domain,
            "logo_url": self.logo_url,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "font_family": self.font_family,
        }
