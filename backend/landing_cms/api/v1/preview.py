from flask import g, request, jsonify
from landing_cms.application.cms.queries import get_preview_page
from landing_cms.application.content.markdown_content import get_rendered_markdown
from landing_cms.normalizers.page import normalize_page
from . import v1_bp


@v1_bp.route("/preview", methods=["GET"])
def preview_page():
    """Unauthenticated staged-content preview; every miss is a 404."""
    tenant = g.current_tenant
    page = get_preview_page(
        tenant_id=tenant.id,
        token=request.args.get("token"),
        slug=request.args.get("slug"),
    )

    def render(key):
        return get_rendered_markdown(tenant_id=tenant.id, key=key, locale=page.locale)

    return jsonify({
        "page": normalize_page(page, render=render),
        "preview": True,
    })
