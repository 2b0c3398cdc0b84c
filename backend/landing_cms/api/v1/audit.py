from flask import request, jsonify, g
from flask_jwt_extended import jwt_required
from landing_cms.models.audit_log import AuditLog
from landing_cms.models.user import CONTENT_ROLES
from landing_cms.normalizers.audit import normalize_audit_log
from landing_cms.normalizers.pagination import normalize_pagination
from landing_cms.utils.decorators import tenant_required, roles_required
from landing_cms.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*CONTENT_ROLES)
def list_audit_logs():
    tenant = g.current_tenant

    query = AuditLog.query.filter(
        AuditLog.tenant_id == tenant.id
    )

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, cursor = paginate_cursor(
        query,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor)), 200
