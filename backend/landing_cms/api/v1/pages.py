# landing_cms/api/v1/pages.py
from flask import g, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from landing_cms.application.cms.create_page import create_page as create_page_service
from landing_cms.application.cms.delete_page import delete_page as delete_page_service
from landing_cms.application.cms.publish_page import publish_page as publish_page_service
from landing_cms.application.cms.update_page import update_page as update_page_service
from landing_cms.application.cms.queries import (
    get_page as get_page_query,
    get_page_versions,
    get_published_page,
    list_pages as list_pages_query,
)
from landing_cms.application.content.markdown_content import get_rendered_markdown
from landing_cms.domain.exceptions import ValidationError
from landing_cms.models.user import CONTENT_ROLES
from landing_cms.normalizers.page import normalize_page, normalize_version
from landing_cms.utils.decorators import tenant_required, roles_required
from . import v1_bp


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body", details={"body": "must be a JSON object"})
    return data


def _locale_arg():
    return request.args.get("locale") or current_app.config["DEFAULT_LOCALE"]


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def create_page():
    page = create_page_service(
        tenant_id=g.current_tenant.id,
        actor=g.current_principal,
        data=_json_body(),
    )
    return jsonify({"page": normalize_page(page, admin=True)}), 201


@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@tenant_required
def list_pages():
    pages = list_pages_query(
        tenant_id=g.current_tenant.id,
        locale=_locale_arg(),
        status=request.args.get("status") or None,
    )
    return jsonify({"pages": [normalize_page(p, admin=True) for p in pages]})


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_page(page_id):
    page = get_page_query(tenant_id=g.current_tenant.id, page_id=page_id)
    return jsonify({"page": normalize_page(page, admin=True)})


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def update_page(page_id):
    page = update_page_service(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        actor=g.current_principal,
        data=_json_body(),
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify({"page": normalize_page(page, admin=True)}), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def delete_page(page_id):
    delete_page_service(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        actor=g.current_principal,
    )
    return jsonify({"success": True}), 200


@v1_bp.route("/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def publish_page(page_id):
    data = _json_body()
    result = publish_page_service(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        environment=data.get("environment"),
        actor=g.current_principal,
    )
    return jsonify({
        "page": normalize_page(result.page, admin=True),
        "preview_url": result.preview_url,
    }), 200


@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def list_versions(page_id):
    versions = get_page_versions(tenant_id=g.current_tenant.id, page_id=page_id)
    return jsonify({"versions": [normalize_version(v) for v in versions]})


# ------------------------
# Public site
# ------------------------

@v1_bp.route("/pages/slug/<slug>", methods=["GET"])
def get_public_page(slug):
    tenant = g.current_tenant
    locale = _locale_arg()

    page = get_published_page(tenant_id=tenant.id, slug=slug, locale=locale)

    def render(key):
        return get_rendered_markdown(tenant_id=tenant.id, key=key, locale=locale)

    return jsonify({
        "page": normalize_page(page, render=render),
        "tenant": tenant.to_dict(),
    })
