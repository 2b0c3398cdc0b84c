"""Test helpers shared across modules."""

import io

from flask_jwt_extended import create_access_token
from PIL import Image

from landing_cms.utils.decorators import Principal


def auth_headers(principal: Principal, domain: str = "localhost") -> dict:
    """Bearer token + tenant header for a principal."""
    token = create_access_token(
        identity=principal.id,
        additional_claims={"role": principal.role, "tenant_id": principal.tenant_id},
    )
    return {
        "Authorization": f"Bearer {token}",
        "X-Tenant-Domain": domain,
    }


def make_image_bytes(fmt: str = "PNG", size=(640, 480), color=(200, 30, 30)) -> bytes:
    mode = "RGBA" if fmt in ("PNG", "WEBP") else "RGB"
    fill = color + (255,) if mode == "RGBA" else color
    image = Image.new(mode, size, fill)
    out = io.BytesIO()
    image.save(out, fmt)
    return out.getvalue()


def sample_layout():
    return [
        {"id": "hero-1", "type": "hero", "content": {"title": "Bienvenido"}},
        {"id": "md-1", "type": "markdown", "content": {"key": "home-hero"}},
    ]
