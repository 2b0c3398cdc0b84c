from flask import g, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from landing_cms.application.content.markdown_content import get_rendered_markdown, upsert_markdown
from landing_cms.domain.exceptions import NotFound, ValidationError
from landing_cms.models.user import CONTENT_ROLES
from landing_cms.utils.decorators import tenant_required, roles_required
from . import v1_bp


@v1_bp.route("/content/<key>", methods=["GET"])
def get_content(key):
    locale = request.args.get("locale") or current_app.config["DEFAULT_LOCALE"]
    html = get_rendered_markdown(tenant_id=g.current_tenant.id, key=key, locale=locale)

    if html is None:
        raise NotFound("Content not found")

    return jsonify({"key": key, "locale": locale, "html": html})


@v1_bp.route("/content/<key>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def put_content(key):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body", details={"body": "must be a JSON object"})

    record = upsert_markdown(
        tenant_id=g.current_tenant.id,
        key=key,
        locale=data.get("locale") or current_app.config["DEFAULT_LOCALE"],
        content=data.get("content"),
        actor=g.current_principal,
    )

    return jsonify({
        "id": record.id,
        "key": record.key,
        "locale": record.locale,
        "updated_at": record.updated_at.isoformat() if record.updated_at else None,
    }), 200
