from flask import g, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from landing_cms.application.media.list_media import list_media as list_media_query
from landing_cms.application.media.upload_media import UploadedFile, upload_media as upload_media_service
from landing_cms.normalizers.media import normalize_media
from landing_cms.normalizers.pagination import normalize_pagination
from landing_cms.utils.decorators import tenant_required
from landing_cms.utils.pagination import parse_limit
from . import v1_bp


def _read_upload():
    file = request.files.get("file")
    if file is None or not file.filename:
        return None

    # Read one byte past the ceiling; enough to know it is too large
    data = file.stream.read(current_app.config["MAX_FILE_SIZE"] + 1)

    return UploadedFile(
        name=file.filename,
        mime_type=file.mimetype,
        size_bytes=len(data),
        data=data,
    )


@v1_bp.route("/media", methods=["POST"])
@jwt_required()
@tenant_required
def upload_media():
    # Role is checked by the service before the body is interpreted
    media = upload_media_service(
        tenant_id=g.current_tenant.id,
        actor=g.current_principal,
        upload=_read_upload() if g.current_principal.can_edit else None,
    )
    return jsonify({"media": normalize_media(media)}), 201


@v1_bp.route("/media", methods=["GET"])
@jwt_required()
@tenant_required
def list_media():
    items, cursor = list_media_query(
        tenant_id=g.current_tenant.id,
        type_filter=request.args.get("type"),
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )
    return jsonify(normalize_pagination(items, normalize_media, cursor))
