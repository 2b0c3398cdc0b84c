from flask import request, g, jsonify
from landing_cms.models.tenant import Tenant

TENANT_HEADER = "X-Tenant-Domain"
DEFAULT_DOMAIN = "localhost"

# Endpoints served without a tenant
PUBLIC_ENDPOINTS = {"static", "openapi_cms", "uploaded_file", "v1.health_check"}
PUBLIC_BLUEPRINTS = {"swagger_ui"}

def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        if request.endpoint is None or request.endpoint in PUBLIC_ENDPOINTS:
            return None
        if request.blueprint in PUBLIC_BLUEPRINTS:
            return None

        domain = (request.headers.get(TENANT_HEADER) or DEFAULT_DOMAIN).strip().lower()

        tenant = Tenant.query.filter_by(domain=domain, is_active=True).first()
        if not tenant:
            return jsonify({"error": "NotFound", "message": "Tenant not found"}), 404

        # Attach tenant to global context
        g.current_tenant = tenant
        return None
