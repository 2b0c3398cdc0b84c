import os
from dataclasses import dataclass
from typing import Optional
from flask import current_app
from landing_cms.extensions import db
from landing_cms.models.media import (
    Media,
    MEDIA_DOCUMENT,
    MEDIA_IMAGE,
    SCAN_CLEAN,
    SCAN_PENDING,
)
from landing_cms.application._guards import require_editor
from landing_cms.domain.exceptions import PayloadTooLarge, UnsupportedMediaType, ValidationError
from landing_cms.models.audit_log import ENTITY_MEDIA
from landing_cms.utils.audit import log_action
from landing_cms.utils.images import ImageVariants, derive_variants, is_raster_image
from landing_cms.utils.scanning import antivirus_enabled, queue_scan
from landing_cms.utils.storage import build_filename, get_storage, tenant_path
from landing_cms.utils.transaction import transactional


@dataclass(frozen=True)
class UploadedFile:
    name: str
    mime_type: str
    size_bytes: int
    data: bytes


def _format_mib(size: int) -> str:
    return f"{size / 1024 / 1024:g}MB"


def upload_media(
    *,
    tenant_id: str,
    actor,
    upload: Optional[UploadedFile],
) -> Media:
    """
    Validate, store and record an uploaded asset.

    Order matters: every rejection happens before anything touches
    storage, so refused uploads leave no files behind.
    """
    # 1️⃣ Role
    require_editor(actor)

    if upload is None or not upload.name:
        raise ValidationError("No file provided", details={"file": "is required"})

    # 2️⃣ Size ceiling
    max_size = current_app.config["MAX_FILE_SIZE"]
    if upload.size_bytes > max_size:
        raise PayloadTooLarge(f"File size exceeds maximum of {_format_mib(max_size)}")

    # 3️⃣ MIME allow-list
    mime_type = (upload.mime_type or "").lower()
    if mime_type not in current_app.config["ALLOWED_MIME_TYPES"]:
        raise UnsupportedMediaType(f"File type {upload.mime_type or 'unknown'} not allowed")

    storage = get_storage()

    # 4️⃣ Original
    filename = build_filename(upload.name)
    relative_path = storage.save(tenant_path(tenant_id, filename), upload.data)

    # 5️⃣ Variants, raster images only
    variants = ImageVariants()
    if is_raster_image(mime_type):
        stem = os.path.splitext(filename)[0]
        variants = derive_variants(
            upload.data,
            mime_type=mime_type,
            save=storage.save,
            thumbnail_name=tenant_path(tenant_id, f"{stem}_thumb.jpg"),
            webp_name=tenant_path(tenant_id, f"{stem}.webp"),
        )

    # 6️⃣ Record
    scanning = antivirus_enabled()

    media = Media()
    media.tenant_id = tenant_id
    media.filename = filename
    media.original_name = upload.name
    media.mime_type = mime_type
    media.size = upload.size_bytes
    media.type = MEDIA_IMAGE if mime_type.startswith("image/") else MEDIA_DOCUMENT
    media.path = relative_path
    media.thumbnail_path = variants.thumbnail_path
    media.webp_path = variants.webp_path
    media.width = variants.width
    media.height = variants.height
    media.uploaded_by = actor.id
    media.scanned = not scanning
    media.scan_status = SCAN_PENDING if scanning else SCAN_CLEAN

    try:
        with transactional():
            db.session.add(media)
            db.session.flush()

            log_action(
                tenant_id=tenant_id,
                actor_id=actor.id,
                action="media.upload",
                entity_type=ENTITY_MEDIA,
                entity_id=media.id,
                payload={
                    "filename": filename,
                    "mime_type": mime_type,
                    "size": upload.size_bytes,
                    "scan_status": media.scan_status,
                },
            )
    except Exception:
        # No record, no blobs
        for path in (relative_path, variants.thumbnail_path, variants.webp_path):
            storage.delete(path)
        raise

    current_app.logger.info(
        "Stored media %s (%s, %d bytes) for tenant %s", media.id, mime_type, upload.size_bytes, tenant_id
    )

    # 7️⃣ After commit: hand off to the scanner
    if scanning:
        queue_scan(media.id, tenant_id, storage.absolute_path(relative_path))

    return media
